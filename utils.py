# utils.py

import random
import re
from typing import Dict, Iterable, List, Optional, Sequence

from config import (
    EMPTY_SLOT_LABEL,
    NO_EVICTION_LABEL,
    RANDOM_LENGTH,
    RANDOM_LOCALITY,
    RANDOM_PAGE_RANGE,
    RATIO_PRECISION,
)
from engine import Comparison, SimulationResult, Summary, Trace, simulate


# -----------------------------
# Input
# -----------------------------
def parse_reference_string(text: str) -> List[int]:
    """Parse page numbers separated by commas and/or whitespace."""
    pages = []
    for token in re.split(r"[\s,]+", text.strip()):
        if token == "":
            continue
        try:
            pages.append(int(token))
        except ValueError:
            raise ValueError(f"Invalid page number: {token!r}") from None
    return pages


def generate_reference_string(length: int = RANDOM_LENGTH,
                              page_range: int = RANDOM_PAGE_RANGE,
                              locality: float = RANDOM_LOCALITY,
                              seed: Optional[int] = None) -> List[int]:
    """
    Generate a reference string with some locality of reference.

    With probability ``locality`` the next page stays within two pages of the
    current one, otherwise it jumps anywhere in ``[0, page_range)``.
    """
    rng = random.Random(seed)
    pages = []
    current = rng.randint(0, page_range - 1)

    for _ in range(length):
        if rng.random() < locality:
            offset = rng.choice([-2, -1, 0, 1, 2])
            current = max(0, min(page_range - 1, current + offset))
        else:
            current = rng.randint(0, page_range - 1)
        pages.append(current)

    return pages


# -----------------------------
# Formatting
# -----------------------------
def get_color(page: Optional[int]) -> str:
    """Return a color for a frame: grey when free, a fixed pastel per page."""
    if page is None:
        return "#d3d3d3"  # light grey
    return f"hsl({(page * 47) % 360}, 70%, 75%)"


def format_frames(frames: Sequence[Optional[int]]) -> str:
    """Render frames as ``[1 2 _]``."""
    return "[" + " ".join(EMPTY_SLOT_LABEL if p is None else str(p) for p in frames) + "]"


def format_ratio(value: float) -> str:
    return f"{value:.{RATIO_PRECISION}f}"


def comparison_rows(comparison: Comparison) -> List[Dict[str, object]]:
    """Comparison table rows with ratios rounded for display."""
    return [
        dict(row, hit_ratio=format_ratio(row["hit_ratio"]), fault_ratio=format_ratio(row["fault_ratio"]))
        for row in comparison.rows()
    ]


def step_rows(result: SimulationResult) -> List[Dict[str, object]]:
    """Step trace as table rows (one dict per step)."""
    return [
        {
            "step": s.number,
            "page": s.page,
            "frames": format_frames(s.frames),
            "status": "Hit" if s.hit else "Fault",
            "replaced": NO_EVICTION_LABEL if s.evicted is None else s.evicted,
        }
        for s in result.steps
    ]


def format_step_table(result: SimulationResult) -> str:
    rule = "-" * 45
    lines = [
        rule,
        f"  {result.policy} - Step-wise Simulation",
        rule,
        f"{'Step':<8}{'Page':<8}{'Frames':<20}{'Status':<10}{'Replaced':<10}",
        rule,
    ]
    for row in step_rows(result):
        lines.append(
            f"{row['step']:<8}{row['page']:<8}{row['frames']:<20}"
            f"{row['status']:<10}{str(row['replaced']):<10}"
        )
    return "\n".join(lines)


def format_summary(summary: Summary) -> str:
    return "\n".join([
        f"=== {summary.policy} SUMMARY ===",
        f"Total Hits   : {summary.hits}",
        f"Total Faults : {summary.faults}",
        f"Hit Ratio    : {format_ratio(summary.hit_ratio)}",
        f"Fault Ratio  : {format_ratio(summary.fault_ratio)}",
    ])


def format_comparison(comparison: Comparison) -> str:
    lines = [
        "=========== COMPARISON TABLE ===========",
        f"{'Algorithm':<15}{'Hits':<12}{'Faults':<12}{'HitRatio':<12}{'FaultRatio':<12}",
        "-" * 47,
    ]
    for s in comparison.summaries:
        lines.append(
            f"{s.policy:<15}{s.hits:<12}{s.faults:<12}"
            f"{format_ratio(s.hit_ratio):<12}{format_ratio(s.fault_ratio):<12}"
        )
    return "\n".join(lines)


# -----------------------------
# Analysis
# -----------------------------
def fault_curve(pages: Sequence[int], policy: str, frame_counts: Iterable[int]) -> Dict[int, int]:
    """
    Fault count of one policy for each frame count.

    FIFO on ``1,2,3,4,1,2,5,1,2,3,4,5`` faults more with 4 frames than with 3
    (Belady's anomaly).
    """
    return {
        n: simulate(Trace(pages, n), policy).summary.faults
        for n in frame_counts
    }
