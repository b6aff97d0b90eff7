"""
Page Replacement Visualizer - FIFO, LRU, Optimal, LFU & Second Chance

This application replays a page reference string against a fixed number of
frames and visualizes how each replacement algorithm behaves:
    - Step-wise frame table with hits, faults and replaced pages
    - Frame occupancy over time
    - Per-policy summary and event log
    - Side-by-side comparison of all five policies
    - Fault count as the number of frames grows (Belady's anomaly)

Built with Streamlit for the web interface and Plotly for visualizations.
The simulation itself lives in engine.py.

Run with:  streamlit run app.py
"""

# =============================================================================
# IMPORTS
# =============================================================================

import plotly.graph_objects as go            # Interactive plotting library
import streamlit as st                       # Web application framework

from config import (
    DEFAULT_FRAME_COUNT,
    DEFAULT_REFERENCE_STRING,
    EVENT_LOG_TAIL,
    MAX_FRAME_COUNT,
    MIN_FRAME_COUNT,
    RANDOM_LENGTH,
    RANDOM_PAGE_RANGE,
)
from engine import (
    MODES,
    POLICY_ORDER,
    Comparison,
    ReplacementPolicy,
    SimulationError,
    SimulationResult,
    Trace,
    run,
)
from utils import (
    comparison_rows,
    fault_curve,
    format_ratio,
    generate_reference_string,
    get_color,
    parse_reference_string,
    step_rows,
)


# =============================================================================
# CHART HELPERS
# =============================================================================

def frame_timeline(result: SimulationResult) -> go.Figure:
    """
    Frame occupancy over time: one row per frame, one column per step.

    Cells show the resident page; faults are marked on the x-axis labels.
    """
    steps = result.steps
    frame_count = len(steps[0].frames)
    x = [f"{s.number}{'*' if s.fault else ''}" for s in steps]

    fig = go.Figure()
    for frame_no in range(frame_count):
        pages = [s.frames[frame_no] for s in steps]
        fig.add_trace(go.Bar(
            x=x,
            y=[1] * len(steps),
            name=f"F{frame_no}",
            text=["" if p is None else f"P{p}" for p in pages],
            marker_color=[get_color(p) for p in pages],
            hoverinfo="text",
            showlegend=False,
        ))

    fig.update_layout(
        barmode="stack",
        height=80 + 40 * frame_count,
        yaxis=dict(showticklabels=False),
        xaxis=dict(title="Step (* = fault)"),
        margin=dict(t=10),
    )
    return fig


def hits_vs_faults(result: SimulationResult) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=["Hits", "Faults"],
        y=[result.summary.hits, result.summary.faults],
        marker_color=["lightgreen", "salmon"],
    ))
    fig.update_layout(height=300, title="Hits vs Faults")
    return fig


def comparison_chart(comparison: Comparison) -> go.Figure:
    names = [s.policy for s in comparison.summaries]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=names, y=[s.hits for s in comparison.summaries], name="Hits"))
    fig.add_trace(go.Bar(x=names, y=[s.faults for s in comparison.summaries], name="Faults"))
    fig.update_layout(barmode="group", height=350, title="Hits and Faults per Policy")
    return fig


def show_result(result: SimulationResult):
    """Render the step table, charts, statistics and log of one run."""
    st.subheader(f"{result.policy} — Step-wise Simulation")

    if not result.steps:
        st.write("Reference string empty — nothing to simulate")
    else:
        st.plotly_chart(frame_timeline(result), use_container_width=True)
        st.table(step_rows(result))

    col1, col2 = st.columns([1, 2])

    with col1:
        st.metric("Page Accesses", result.summary.total)
        st.metric("Page Faults", result.summary.faults)
        st.metric("Hit Ratio", format_ratio(result.summary.hit_ratio))
        st.metric("Fault Ratio", format_ratio(result.summary.fault_ratio))

    with col2:
        st.plotly_chart(hits_vs_faults(result), use_container_width=True)

    # Most recent events first
    with st.expander("Event Log"):
        for ev in result.event_log[-EVENT_LOG_TAIL:][::-1]:
            st.write(ev)


# =============================================================================
# STREAMLIT UI - Web Application Interface
# =============================================================================

st.set_page_config(page_title="Page Replacement Visualizer", layout="wide")

page = st.sidebar.radio("Choose View", ["Simulator", "Concepts"])

st.title("Page Replacement Visualizer — FIFO, LRU, Optimal, LFU & Second Chance")

# =============================================================================
# CONCEPTS PAGE - Educational Content
# =============================================================================

if page == "Concepts":
    st.header("Page Replacement Algorithms")
    st.markdown(
        """
        When every frame is occupied and a page that is not resident is
        referenced (a **page fault**), one resident page must be replaced.

        #### **FIFO (First In First Out)**
        - Replace frames in circular order, oldest load first.
        - Ignores how often or how recently a page is used.
        - Can fault *more* with more frames (Belady's anomaly).

        #### **LRU (Least Recently Used)**
        - Replace the page that hasn't been referenced for the longest time.

        #### **Optimal (Belady)**
        - Replace the page whose next reference is farthest in the future,
          or any page never referenced again.
        - Needs the whole reference string in advance; used as a lower bound.

        #### **LFU (Least Frequently Used)**
        - Replace the page with the fewest references since it was loaded.
        - Ties go to the page loaded earliest.

        #### **Second Chance (Clock)**
        - A hand sweeps the frames in circular order.
        - A page with its reference bit set gets the bit cleared and is skipped
          once; the first page found with a clear bit is replaced.
        """
    )
    st.stop()  # Stop rendering - don't show simulator on Concepts page

# -----------------------------------------------------------------------------
# SIDEBAR - Simulation Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Simulation Settings")

if "reference_string" not in st.session_state:
    st.session_state.reference_string = DEFAULT_REFERENCE_STRING

if st.sidebar.button("Generate Random Reference String"):
    st.session_state.reference_string = ",".join(
        map(str, generate_reference_string(RANDOM_LENGTH, RANDOM_PAGE_RANGE))
    )

access_input = st.sidebar.text_area(
    "Reference string (comma or space separated page numbers)",
    key="reference_string",
)

frame_count = st.sidebar.number_input(
    "Number of frames",
    min_value=MIN_FRAME_COUNT,
    max_value=MAX_FRAME_COUNT,
    value=DEFAULT_FRAME_COUNT,
    step=1,
)

mode = st.sidebar.selectbox(
    "Algorithm",
    options=list(MODES),
    index=len(MODES) - 1,  # Default: run all and compare
)

# -----------------------------------------------------------------------------
# INPUT VALIDATION
# -----------------------------------------------------------------------------

try:
    pages = parse_reference_string(access_input)
    trace = Trace(pages, int(frame_count))
    outcome = run(trace, mode)
except (ValueError, SimulationError) as e:
    st.error(str(e))
    st.stop()

# =============================================================================
# MAIN CONTENT AREA
# =============================================================================

if isinstance(outcome, Comparison):
    st.header("Comparison")
    st.table(comparison_rows(outcome))
    st.success(f"Fewest faults: {outcome.best()}")
    st.plotly_chart(comparison_chart(outcome), use_container_width=True)

    tabs = st.tabs(list(POLICY_ORDER))
    for tab, result in zip(tabs, outcome.results.values()):
        with tab:
            show_result(result)
else:
    show_result(outcome)

# ----- Fault Curve -----
st.header("Faults vs Number of Frames")

curve_fig = go.Figure()
frame_range = range(MIN_FRAME_COUNT, MAX_FRAME_COUNT + 1)
curve_policies = POLICY_ORDER if mode == ReplacementPolicy.ALL else (mode,)
for name in curve_policies:
    curve = fault_curve(pages, name, frame_range)
    curve_fig.add_trace(go.Scatter(
        x=list(curve.keys()),
        y=list(curve.values()),
        mode="lines+markers",
        name=name,
    ))
curve_fig.update_layout(height=350, xaxis=dict(title="Frames"), yaxis=dict(title="Faults"))
st.plotly_chart(curve_fig, use_container_width=True)

# =============================================================================
# FOOTER - Usage Tips and Examples
# =============================================================================

st.markdown("---")
st.markdown(
    "**Usage tips**:\n"
    "- Enter a reference string and the number of frames in the sidebar.\n"
    "- Pick a single algorithm, or **All** to compare every policy.\n"
    "- Faulting steps are marked with `*` in the frame timeline."
)

st.markdown("---")
st.markdown(
    "**Instructor examples**:\n"
    "1) Belady's anomaly: FIFO on `1,2,3,4,1,2,5,1,2,3,4,5` faults more with 4 frames than with 3.\n"
    "2) Reuse: `1,2,3,1,2,4,5,1` with 3 frames: Optimal and LFU fault 5 times, the others 6."
)
