"""Tests for the five replacement policies.

Each policy is driven access by access through ``on_access`` so the
victim-selection rule and its tie-breaks can be checked directly.
"""

import pytest

from engine import (
    FIFOPolicy,
    LFUPolicy,
    LRUPolicy,
    OptimalPolicy,
    SecondChancePolicy,
)
from utils import generate_reference_string


def drive(policy, pages):
    """Feed every page to the policy, returning the decisions."""
    decisions = []
    for index, page in enumerate(pages):
        remaining = tuple(pages[index + 1:]) if policy.lookahead else ()
        decisions.append(policy.on_access(page, index, remaining))
    return decisions


def evictions(decisions):
    return [d.evicted for d in decisions]


# -- Shared access routine ----------------------------------------------------


class TestOnAccess:
    """Verify the hit / fill / replace sequence common to every policy."""

    def test_hit_reports_frame(self) -> None:
        policy = FIFOPolicy(2)
        policy.on_access(4, 0)
        decision = policy.on_access(4, 1)
        assert decision.hit
        assert decision.slot == 0
        assert decision.evicted is None

    def test_fault_fills_free_frame(self) -> None:
        policy = LRUPolicy(2)
        policy.on_access(4, 0)
        decision = policy.on_access(5, 1)
        assert not decision.hit
        assert decision.slot == 1
        assert decision.evicted is None

    def test_event_log(self) -> None:
        """Accesses, loads and evictions are logged in order."""
        policy = FIFOPolicy(1)
        drive(policy, [1, 1, 2])
        assert policy.event_log == [
            "Fault: Page 1 not in memory",
            "Loaded: Page 1 -> Frame 0",
            "Hit: Page 1 in Frame 0",
            "Fault: Page 2 not in memory",
            "Evicting: Page 1 from Frame 0",
            "Loaded: Page 2 -> Frame 0 (replaced)",
        ]


# -- FIFO ---------------------------------------------------------------------


class TestFIFOPolicy:
    """FIFO replaces frames in circular order regardless of use."""

    def test_filling_does_not_move_pointer(self) -> None:
        policy = FIFOPolicy(3)
        drive(policy, [1, 2, 3, 1])
        assert policy.pointer == 0

    def test_evicts_in_insertion_order(self) -> None:
        """Pages that never hit are evicted in the order they were loaded."""
        policy = FIFOPolicy(3)
        decisions = drive(policy, [1, 2, 3, 4, 1, 2, 5])
        assert evictions(decisions) == [None, None, None, 1, 2, 3, 4]
        assert policy.pointer == 1

    def test_hit_does_not_change_order(self) -> None:
        """Re-referencing the oldest page does not protect it."""
        policy = FIFOPolicy(2)
        decisions = drive(policy, [1, 2, 1, 3])
        assert decisions[-1].evicted == 1


# -- LRU ----------------------------------------------------------------------


class TestLRUPolicy:
    """LRU replaces the page referenced longest ago."""

    def test_selects_least_recently_used(self) -> None:
        policy = LRUPolicy(3)
        decisions = drive(policy, [1, 2, 3, 1, 4])
        assert decisions[-1].evicted == 2
        assert policy.last_used == [3, 4, 2]

    def test_evicted_marker_is_strict_minimum(self) -> None:
        """Right before an eviction, the victim's marker is below every other."""
        pages = generate_reference_string(200, 10, seed=7)
        policy = LRUPolicy(4)

        for index, page in enumerate(pages):
            before = list(policy.last_used)
            decision = policy.on_access(page, index)
            if decision.evicted is not None:
                victim = before[decision.slot]
                others = [m for slot, m in enumerate(before) if slot != decision.slot]
                assert all(victim < m for m in others)


# -- Optimal ------------------------------------------------------------------


class TestOptimalPolicy:
    """Optimal replaces the page needed farthest in the future."""

    def test_never_used_again_is_evicted(self) -> None:
        policy = OptimalPolicy(3)
        decisions = drive(policy, [1, 2, 3, 4, 1, 2, 5])
        assert decisions[3].evicted == 3

    def test_first_unused_frame_wins(self) -> None:
        """With no future references at all, the lowest frame is chosen."""
        policy = OptimalPolicy(3)
        decisions = drive(policy, [1, 2, 3, 4])
        assert decisions[3].evicted == 1
        assert decisions[3].slot == 0

    def test_omitted_remaining_means_no_future_use(self) -> None:
        """Without the rest of the trace no page is used again; the lowest frame goes."""
        policy = OptimalPolicy(3)
        for index, page in enumerate([1, 2, 3]):
            policy.on_access(page, index)
        assert policy.on_access(4, 3).evicted == 1
        assert policy.on_access(5, 4, remaining=(3, 4)).evicted == 2

    def test_farthest_next_use(self) -> None:
        policy = OptimalPolicy(3)
        decisions = drive(policy, [1, 2, 3, 4, 1, 2, 3])
        assert decisions[3].evicted == 3
        assert decisions[3].slot == 2


# -- LFU ----------------------------------------------------------------------


class TestLFUPolicy:
    """LFU replaces the least referenced page, oldest load first on ties."""

    def test_selects_least_frequent(self) -> None:
        policy = LFUPolicy(3)
        decisions = drive(policy, [1, 1, 2, 3, 2, 4])
        assert decisions[-1].evicted == 3
        assert policy.frequency == [2, 2, 1]

    def test_tie_goes_to_oldest_load(self) -> None:
        policy = LFUPolicy(3)
        decisions = drive(policy, [1, 2, 3, 4])
        assert decisions[-1].evicted == 1

    def test_reload_resets_counters(self) -> None:
        """A replaced frame restarts at frequency one with a new load step."""
        policy = LFUPolicy(2)
        decisions = drive(policy, [1, 2, 1, 2, 3, 4])
        assert evictions(decisions)[4:] == [1, 3]
        assert policy.frequency == [1, 2]
        assert policy.load_step == [5, 1]


# -- Second Chance ------------------------------------------------------------


class TestSecondChancePolicy:
    """Clock sweep skips referenced frames once."""

    def test_all_referenced_wraps_around(self) -> None:
        """Every bit is cleared, then the frame at the hand is replaced."""
        policy = SecondChancePolicy(3)
        decisions = drive(policy, [1, 2, 3, 4])
        assert decisions[-1].evicted == 1
        assert policy.last_sweep == 4
        assert policy.hand == 1
        assert policy.reference_bits == [1, 0, 0]

    def test_hit_gives_second_chance(self) -> None:
        policy = SecondChancePolicy(3)
        decisions = drive(policy, [1, 2, 3, 4, 2, 5])
        assert decisions[-1].evicted == 3
        assert policy.frames.snapshot() == (4, 2, 5)

    def test_fill_does_not_move_hand(self) -> None:
        policy = SecondChancePolicy(3)
        drive(policy, [1, 2])
        assert policy.hand == 0
        assert policy.last_sweep == 0

    @pytest.mark.parametrize("frame_count", [1, 2, 3, 5, 8])
    def test_sweep_terminates(self, frame_count) -> None:
        """A sweep never inspects more than twice the number of frames."""
        pages = generate_reference_string(300, 12, seed=frame_count)
        policy = SecondChancePolicy(frame_count)

        for index, page in enumerate(pages):
            decision = policy.on_access(page, index)
            if decision.evicted is not None:
                assert 1 <= policy.last_sweep <= 2 * frame_count
