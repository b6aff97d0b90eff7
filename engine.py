"""
Page Replacement Engine - FIFO, LRU, Optimal, LFU & Second-Chance

This module holds the simulation core used by both shells (``app.py`` and
``cli.py``). Given a reference string of page numbers and a frame count it
replays every access against a fixed set of frames and records, per step,
whether the access was a hit or a fault and which page (if any) was evicted.

Every policy shares one access routine (hit check, free-frame fill,
replacement) and only decides which occupied frame to give up. Results are
returned as plain data classes; nothing here prints.
"""

# =============================================================================
# IMPORTS
# =============================================================================

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Type, Union

from config import MIN_FRAME_COUNT


# =============================================================================
# ERRORS
# =============================================================================

class SimulationError(Exception):
    """Base class for every error raised by the engine."""


class InvalidConfiguration(SimulationError, ValueError):
    """Frame count below one, or a page number that is not a non-negative int."""


class NoEmptySlot(SimulationError, IndexError):
    """A page was loaded into a free frame while every frame was occupied."""


class UnknownSelection(SimulationError, ValueError):
    """The requested mode does not name a policy or ``All``."""


# =============================================================================
# POLICY NAMES & MODES
# =============================================================================

class ReplacementPolicy:
    """
    Enumeration of available page replacement algorithms.

    FIFO:          First-In-First-Out - replaces the oldest loaded page
    LRU:           Least Recently Used - replaces the page unused the longest
    OPTIMAL:       Belady - replaces the page needed farthest in the future
    LFU:           Least Frequently Used - fewest references, oldest load wins ties
    SECOND_CHANCE: Clock - FIFO that spares pages with their reference bit set
    ALL:           Run every policy above and compare
    """
    FIFO = "FIFO"
    LRU = "LRU"
    OPTIMAL = "Optimal"
    LFU = "LFU"
    SECOND_CHANCE = "Second Chance"
    ALL = "All"


# Fixed comparison order
POLICY_ORDER: Tuple[str, ...] = (
    ReplacementPolicy.FIFO,
    ReplacementPolicy.LRU,
    ReplacementPolicy.OPTIMAL,
    ReplacementPolicy.LFU,
    ReplacementPolicy.SECOND_CHANCE,
)

MODES: Tuple[str, ...] = POLICY_ORDER + (ReplacementPolicy.ALL,)

# Console menu numbering
MENU: Dict[int, str] = {number: mode for number, mode in enumerate(MODES, start=1)}

ALIASES: Dict[str, str] = {
    "fifo": ReplacementPolicy.FIFO,
    "lru": ReplacementPolicy.LRU,
    "opt": ReplacementPolicy.OPTIMAL,
    "optimal": ReplacementPolicy.OPTIMAL,
    "lfu": ReplacementPolicy.LFU,
    "sc": ReplacementPolicy.SECOND_CHANCE,
    "clock": ReplacementPolicy.SECOND_CHANCE,
    "second chance": ReplacementPolicy.SECOND_CHANCE,
    "second-chance": ReplacementPolicy.SECOND_CHANCE,
    "all": ReplacementPolicy.ALL,
}


def resolve_mode(selection: Union[int, str]) -> str:
    """
    Map a menu number, mode name or alias onto one of ``MODES``.

    Args:
        selection: ``1``-``6`` (as int or digit string), a mode name such as
            ``"Second Chance"`` or an alias such as ``"sc"``. Case-insensitive.

    Returns:
        str: The canonical mode name.

    Raises:
        UnknownSelection: If the selection names no mode.
    """
    if isinstance(selection, int) and not isinstance(selection, bool):
        if selection in MENU:
            return MENU[selection]
        raise UnknownSelection(f"Unknown selection: {selection}")

    text = str(selection).strip().lower()
    if text.isdecimal() and int(text) in MENU:
        return MENU[int(text)]
    if text in ALIASES:
        return ALIASES[text]
    raise UnknownSelection(f"Unknown selection: {selection!r}")


# =============================================================================
# TRACE - Validated Input
# =============================================================================

def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Trace:
    """
    A reference string together with the number of frames to simulate.

    Attributes:
        pages (Tuple[int, ...]): Page numbers in access order
        frame_count (int): Number of physical frames, at least one

    Raises:
        InvalidConfiguration: On a non-positive frame count or a page number
            that is negative or not an integer.
    """
    pages: Tuple[int, ...]
    frame_count: int

    def __post_init__(self):
        object.__setattr__(self, "pages", tuple(self.pages))

        if not _is_int(self.frame_count) or self.frame_count < MIN_FRAME_COUNT:
            raise InvalidConfiguration(
                f"Frame count must be a positive integer, got {self.frame_count!r}"
            )
        for position, page in enumerate(self.pages):
            if not _is_int(page) or page < 0:
                raise InvalidConfiguration(
                    f"Page at position {position} must be a non-negative integer, got {page!r}"
                )

    def __len__(self) -> int:
        return len(self.pages)


# =============================================================================
# FRAME SET - Fixed Capacity Frame Table
# =============================================================================

@dataclass
class Frame:
    """
    One physical frame: either free or holding exactly one page.

    Attributes:
        frame_no (int): The frame's index in physical memory
        occupied (bool): True if a page is currently loaded here
        page_no (Optional[int]): The page stored here, None if free
    """
    frame_no: int
    occupied: bool = False
    page_no: Optional[int] = None


class FrameSet:
    """
    Fixed-capacity frame table shared by every replacement policy.

    Keeps a page -> frame index alongside the frames so lookups do not scan,
    and refuses to hold the same page in two frames.

    Attributes:
        capacity (int): Number of frames, fixed at construction
        frames (List[Frame]): The frames, in slot order
    """

    def __init__(self, capacity: int):
        if not _is_int(capacity) or capacity < MIN_FRAME_COUNT:
            raise InvalidConfiguration(
                f"Frame count must be a positive integer, got {capacity!r}"
            )
        self.capacity = capacity
        self.frames: List[Frame] = [Frame(i) for i in range(capacity)]

        # Page table: resident page -> frame number
        self._page_table: Dict[int, int] = {}

    def lookup(self, page: int) -> Optional[int]:
        """Return the frame holding ``page``, or None if it is not resident."""
        return self._page_table.get(page)

    def first_empty(self) -> Optional[int]:
        """Return the lowest free frame number, or None if all are occupied."""
        return next((f.frame_no for f in self.frames if not f.occupied), None)

    def is_full(self) -> bool:
        return len(self._page_table) == self.capacity

    def occupant_at(self, slot: int) -> Optional[int]:
        """Return the page in frame ``slot``, None if the frame is free."""
        return self.frames[slot].page_no

    def fill_empty(self, page: int) -> int:
        """
        Load a page into the lowest free frame.

        Args:
            page (int): Page to load, must not already be resident

        Returns:
            int: Frame number the page was loaded into

        Raises:
            NoEmptySlot: If every frame is occupied
            ValueError: If the page is already resident
        """
        slot = self.first_empty()
        if slot is None:
            raise NoEmptySlot("No free frame available")
        self._ensure_not_resident(page)

        frame = self.frames[slot]
        frame.occupied = True
        frame.page_no = page
        self._page_table[page] = slot
        return slot

    def replace(self, slot: int, page: int) -> int:
        """
        Swap the page in an occupied frame for a new one.

        Args:
            slot (int): Frame to reuse, must be occupied
            page (int): Incoming page, must not already be resident

        Returns:
            int: The evicted page

        Raises:
            ValueError: If the frame is free or the page is already resident
        """
        frame = self.frames[slot]
        if not frame.occupied:
            raise ValueError(f"Frame {slot} is free, nothing to replace")
        self._ensure_not_resident(page)

        evicted = frame.page_no
        del self._page_table[evicted]
        frame.page_no = page
        self._page_table[page] = slot
        return evicted

    def snapshot(self) -> Tuple[Optional[int], ...]:
        """Page per frame in slot order, None for free frames."""
        return tuple(f.page_no for f in self.frames)

    @property
    def resident_pages(self) -> List[int]:
        return [f.page_no for f in self.frames if f.occupied]

    def _ensure_not_resident(self, page: int):
        if page in self._page_table:
            raise ValueError(f"Page {page} already resident in Frame {self._page_table[page]}")


# =============================================================================
# EVICTION POLICIES
# =============================================================================

@dataclass(frozen=True)
class Decision:
    """
    Outcome of one access.

    Attributes:
        hit (bool): True if the page was already resident
        slot (int): Frame holding the page after the access
        evicted (Optional[int]): Page replaced to make room, None otherwise
    """
    hit: bool
    slot: int
    evicted: Optional[int] = None


class EvictionPolicy(ABC):
    """
    Base class for page replacement algorithms.

    Owns a FrameSet and an event log. ``on_access`` handles the parts every
    algorithm shares (hit check, loading into a free frame, replacement);
    subclasses keep their own per-frame bookkeeping through the hooks and
    pick the victim frame in ``_choose_victim``.

    Attributes:
        name (str): Policy name as shown in results
        lookahead (bool): True if the policy needs the rest of the trace
        frames (FrameSet): The frames this run owns
        event_log (List[str]): Log of every access, load and eviction
    """
    name = ""
    lookahead = False

    def __init__(self, frame_count: int):
        self.frames = FrameSet(frame_count)
        self.event_log: List[str] = []

    @property
    def frame_count(self) -> int:
        return self.frames.capacity

    def on_access(self, page: int, step: int, remaining: Sequence[int] = ()) -> Decision:
        """
        Access a page, handling hits, faults, and replacement.

        Args:
            page (int): Page being referenced
            step (int): Zero-based position of this access in the trace
            remaining (Sequence[int]): Pages referenced after this one; only
                read by policies with ``lookahead`` set (Optimal). Omitting
                it there means "no page is referenced again", so the lowest
                frame is evicted. ``simulate`` always passes the real suffix.

        Returns:
            Decision: Hit flag, frame now holding the page, evicted page
        """
        # ----- PAGE HIT -----
        slot = self.frames.lookup(page)
        if slot is not None:
            self._on_hit(slot, step)
            self.event_log.append(f"Hit: Page {page} in Frame {slot}")
            return Decision(hit=True, slot=slot)

        # ----- PAGE FAULT -----
        self.event_log.append(f"Fault: Page {page} not in memory")

        if not self.frames.is_full():
            slot = self.frames.fill_empty(page)
            self._on_load(slot, step)
            self.event_log.append(f"Loaded: Page {page} -> Frame {slot}")
            return Decision(hit=False, slot=slot)

        slot = self._choose_victim(step, remaining)
        self.event_log.append(f"Evicting: Page {self.frames.occupant_at(slot)} from Frame {slot}")
        evicted = self.frames.replace(slot, page)
        self._on_load(slot, step)
        self.event_log.append(f"Loaded: Page {page} -> Frame {slot} (replaced)")
        return Decision(hit=False, slot=slot, evicted=evicted)

    def _on_hit(self, slot: int, step: int):
        """Bookkeeping when the page in ``slot`` is referenced again."""

    def _on_load(self, slot: int, step: int):
        """Bookkeeping when a page is loaded into ``slot`` (free or replaced)."""

    @abstractmethod
    def _choose_victim(self, step: int, remaining: Sequence[int]) -> int:
        """
        Pick the occupied frame to replace. Only called when every frame is
        occupied, and the replacement always follows, so policies may advance
        their own pointers here.
        """


class FIFOPolicy(EvictionPolicy):
    """Replaces frames in circular order, ignoring how pages are used."""
    name = ReplacementPolicy.FIFO

    def __init__(self, frame_count: int):
        super().__init__(frame_count)
        self.pointer = 0  # Next frame to replace

    def _choose_victim(self, step, remaining):
        victim = self.pointer
        self.pointer = (self.pointer + 1) % self.frame_count
        return victim


class LRUPolicy(EvictionPolicy):
    """Replaces the frame whose page was referenced longest ago."""
    name = ReplacementPolicy.LRU

    def __init__(self, frame_count: int):
        super().__init__(frame_count)
        # Step of last reference per frame
        self.last_used: List[int] = [-1] * frame_count

    def _on_hit(self, slot, step):
        self.last_used[slot] = step

    def _on_load(self, slot, step):
        self.last_used[slot] = step

    def _choose_victim(self, step, remaining):
        # min() keeps the lowest frame number on ties
        return min(range(self.frame_count), key=self.last_used.__getitem__)


class OptimalPolicy(EvictionPolicy):
    """
    Belady's algorithm: replaces the page whose next reference is farthest
    away, or the first page never referenced again. Needs the whole trace in
    advance, so it only serves as a lower bound for the other policies.
    """
    name = ReplacementPolicy.OPTIMAL
    lookahead = True

    def _choose_victim(self, step, remaining):
        victim = None
        farthest = -1

        for frame in self.frames.frames:
            try:
                next_use = remaining.index(frame.page_no)
            except ValueError:
                # Never referenced again
                return frame.frame_no
            if next_use > farthest:
                farthest = next_use
                victim = frame.frame_no

        return victim


class LFUPolicy(EvictionPolicy):
    """Replaces the least referenced page; the oldest load breaks ties."""
    name = ReplacementPolicy.LFU

    def __init__(self, frame_count: int):
        super().__init__(frame_count)
        self.frequency: List[int] = [0] * frame_count
        self.load_step: List[int] = [-1] * frame_count

    def _on_hit(self, slot, step):
        self.frequency[slot] += 1

    def _on_load(self, slot, step):
        self.frequency[slot] = 1
        self.load_step[slot] = step

    def _choose_victim(self, step, remaining):
        return min(
            range(self.frame_count),
            key=lambda slot: (self.frequency[slot], self.load_step[slot]),
        )


class SecondChancePolicy(EvictionPolicy):
    """
    Clock algorithm. A hand sweeps the frames in circular order; a frame with
    its reference bit set has the bit cleared and is skipped once, the first
    frame found with a clear bit is replaced.

    Attributes:
        hand (int): Next frame the sweep inspects
        reference_bits (List[int]): One bit per frame
        last_sweep (int): Frames inspected by the most recent sweep
    """
    name = ReplacementPolicy.SECOND_CHANCE

    def __init__(self, frame_count: int):
        super().__init__(frame_count)
        self.hand = 0
        self.reference_bits: List[int] = [0] * frame_count
        self.last_sweep = 0

    def _on_hit(self, slot, step):
        self.reference_bits[slot] = 1

    def _on_load(self, slot, step):
        self.reference_bits[slot] = 1

    def _choose_victim(self, step, remaining):
        self.last_sweep = 0
        while True:
            slot = self.hand
            self.hand = (self.hand + 1) % self.frame_count
            self.last_sweep += 1

            if self.reference_bits[slot] == 0:
                return slot
            self.reference_bits[slot] = 0  # Second chance


POLICIES: Dict[str, Type[EvictionPolicy]] = {
    policy.name: policy
    for policy in (FIFOPolicy, LRUPolicy, OptimalPolicy, LFUPolicy, SecondChancePolicy)
}


def make_policy(name: str, frame_count: int) -> EvictionPolicy:
    """
    Create a fresh policy instance with empty frames.

    Raises:
        UnknownSelection: If ``name`` does not resolve to a single policy
    """
    mode = resolve_mode(name)
    if mode not in POLICIES:
        raise UnknownSelection(f"{mode} is not a single policy")
    return POLICIES[mode](frame_count)


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class StepRecord:
    """
    State after one access.

    Attributes:
        step (int): Zero-based position in the trace
        page (int): Page referenced
        frames (Tuple[Optional[int], ...]): Page per frame after the access
        hit (bool): True on a hit, False on a fault
        evicted (Optional[int]): Page replaced by this access, if any
        slot (int): Frame holding the page after the access
    """
    step: int
    page: int
    frames: Tuple[Optional[int], ...]
    hit: bool
    evicted: Optional[int]
    slot: int

    @property
    def fault(self) -> bool:
        return not self.hit

    @property
    def number(self) -> int:
        """One-based step number for display."""
        return self.step + 1


@dataclass(frozen=True)
class Summary:
    """
    Aggregate statistics of one run. Ratios are 0 for an empty trace.

    Attributes:
        policy (str): Policy name
        hits (int): Number of page hits
        faults (int): Number of page faults
        hit_ratio (float): hits / trace length
        fault_ratio (float): faults / trace length
    """
    policy: str
    hits: int
    faults: int
    hit_ratio: float
    fault_ratio: float

    @property
    def total(self) -> int:
        return self.hits + self.faults

    @classmethod
    def from_steps(cls, policy: str, steps: Sequence[StepRecord]) -> "Summary":
        total = len(steps)
        hits = sum(1 for s in steps if s.hit)
        faults = total - hits
        hit_ratio = (hits / total) if total > 0 else 0.0
        fault_ratio = (faults / total) if total > 0 else 0.0
        return cls(policy, hits, faults, hit_ratio, fault_ratio)


@dataclass
class SimulationResult:
    """Step trace, summary and event log of one policy over one trace."""
    policy: str
    steps: Tuple[StepRecord, ...]
    summary: Summary
    event_log: List[str] = field(default_factory=list)


@dataclass
class Comparison:
    """
    Results of every policy over the same trace, in ``POLICY_ORDER``.

    Attributes:
        results (Dict[str, SimulationResult]): Policy name -> result
    """
    results: Dict[str, SimulationResult]

    @property
    def summaries(self) -> List[Summary]:
        return [result.summary for result in self.results.values()]

    def rows(self) -> List[Dict[str, Union[str, int, float]]]:
        """One row per policy: algorithm, hits, faults, hit_ratio, fault_ratio."""
        return [
            {
                "algorithm": s.policy,
                "hits": s.hits,
                "faults": s.faults,
                "hit_ratio": s.hit_ratio,
                "fault_ratio": s.fault_ratio,
            }
            for s in self.summaries
        ]

    def best(self) -> str:
        """Policy with the fewest faults; earlier policies win ties."""
        return min(self.summaries, key=lambda s: s.faults).policy


# =============================================================================
# RUNNER
# =============================================================================

def simulate(trace: Trace, policy: str) -> SimulationResult:
    """
    Replay the whole trace against a fresh instance of one policy.

    Args:
        trace (Trace): Reference string and frame count
        policy (str): Policy name or alias

    Returns:
        SimulationResult: One StepRecord per page, in trace order, plus the
            summary and event log

    Raises:
        UnknownSelection: If ``policy`` is not a single policy
    """
    engine = make_policy(policy, trace.frame_count)
    pages = trace.pages
    steps: List[StepRecord] = []

    for index, page in enumerate(pages):
        remaining = pages[index + 1:] if engine.lookahead else ()
        decision = engine.on_access(page, index, remaining)
        steps.append(StepRecord(
            step=index,
            page=page,
            frames=engine.frames.snapshot(),
            hit=decision.hit,
            evicted=decision.evicted,
            slot=decision.slot,
        ))

    return SimulationResult(
        policy=engine.name,
        steps=tuple(steps),
        summary=Summary.from_steps(engine.name, steps),
        event_log=list(engine.event_log),
    )


def run_all(trace: Trace) -> Comparison:
    """Run every policy independently over the same trace."""
    return Comparison({name: simulate(trace, name) for name in POLICY_ORDER})


def run(trace: Trace, selection: Union[int, str]) -> Union[SimulationResult, Comparison]:
    """
    Dispatch a menu selection.

    Returns:
        SimulationResult for a single policy, Comparison for ``All``

    Raises:
        UnknownSelection: If the selection names no mode
    """
    mode = resolve_mode(selection)
    if mode == ReplacementPolicy.ALL:
        return run_all(trace)
    return simulate(trace, mode)
