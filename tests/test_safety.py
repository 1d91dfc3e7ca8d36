"""
Safety Algorithm Tests

Tests the safe-sequence search: verdicts, exact sequences, step traces,
and determinism.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from algorithms.safety import check_safety
from models.results import SafetyResult, StepRecord, format_sequence, format_steps


TEXTBOOK_AVAILABLE = [3, 3, 2]
TEXTBOOK_ALLOCATION = [[0, 1, 0], [2, 0, 0], [3, 0, 2], [2, 1, 1], [0, 0, 2]]
TEXTBOOK_NEED = [[7, 4, 3], [1, 2, 2], [6, 0, 0], [0, 1, 1], [4, 3, 1]]


def test_textbook_state_is_safe():
    """Classic 5x3 example yields <P1, P3, P4, P0, P2>."""
    print("\n" + "="*60)
    print("TEST 1: Textbook Safe State")
    print("="*60)

    result = check_safety(TEXTBOOK_AVAILABLE, TEXTBOOK_NEED, TEXTBOOK_ALLOCATION)
    print(f"  Safe: {result.safe}, sequence: {format_sequence(result.sequence)}")

    assert result.safe, "Textbook state should be safe"
    assert result.sequence == [1, 3, 4, 0, 2], "Several processes admitted per pass, lowest index first"
    assert result.blocked == []
    print("  ✓ Safe sequence matches")


def test_textbook_step_trace():
    """Each step records the work vector before and after the release."""
    result = check_safety(TEXTBOOK_AVAILABLE, TEXTBOOK_NEED, TEXTBOOK_ALLOCATION)

    expected = [
        StepRecord(step=1, process=1, work_before=[3, 3, 2], work_after=[5, 3, 2]),
        StepRecord(step=2, process=3, work_before=[5, 3, 2], work_after=[7, 4, 3]),
        StepRecord(step=3, process=4, work_before=[7, 4, 3], work_after=[7, 4, 5]),
        StepRecord(step=4, process=0, work_before=[7, 4, 5], work_after=[7, 5, 5]),
        StepRecord(step=5, process=2, work_before=[7, 5, 5], work_after=[10, 5, 7]),
    ]
    assert result.steps == expected, f"Unexpected trace: {result.steps}"
    print("  ✓ Step trace matches")


def test_check_does_not_modify_inputs():
    available = list(TEXTBOOK_AVAILABLE)
    check_safety(available, TEXTBOOK_NEED, TEXTBOOK_ALLOCATION)
    assert available == [3, 3, 2], "Work must be a copy of Available"


def test_all_zero_state_is_trivially_safe():
    """Nobody needs anything: sequence is plain index order."""
    print("\n" + "="*60)
    print("TEST 2: All-Zero State")
    print("="*60)

    zeros = [[0, 0, 0] for _ in range(4)]
    result = check_safety([0, 0, 0], zeros, zeros)
    assert result.safe
    assert result.sequence == [0, 1, 2, 3], "Every process is admitted in the first pass"
    assert [s.work_after for s in result.steps] == [[0, 0, 0]] * 4
    print("  ✓ Trivially safe in index order")


def test_unsafe_state_reports_nothing_partial():
    """An unsafe verdict carries no sequence and no steps."""
    print("\n" + "="*60)
    print("TEST 3: Unsafe State")
    print("="*60)

    # P0 can finish, but then P1 and P2 are both stuck
    available = [1, 0]
    allocation = [[0, 0], [1, 1], [1, 1]]
    need = [[1, 0], [3, 2], [2, 3]]

    result = check_safety(available, need, allocation)
    print(f"  Safe: {result.safe}, blocked: {result.blocked}")
    assert result == SafetyResult(safe=False, sequence=[], steps=[], blocked=[1, 2]), \
        "Partial progress must be discarded"
    print("  ✓ Unsafe with empty sequence and steps")


def test_no_process_feasible():
    result = check_safety([0, 0], [[1, 0], [0, 1]], [[0, 0], [0, 0]])
    assert not result.safe
    assert result.sequence == [] and result.steps == []
    assert result.blocked == [0, 1]


def test_lowest_index_first_within_pass():
    """When several processes are feasible the scan order decides."""
    # P0 only becomes feasible once P2 has released its allocation
    available = [1]
    allocation = [[0], [0], [5]]
    need = [[3], [1], [1]]

    result = check_safety(available, need, allocation)
    # Pass 1: P0 no, P1 yes (work 1), P2 yes (work 6); pass 2: P0
    assert result.sequence == [1, 2, 0], f"Unexpected sequence {result.sequence}"


def test_safety_is_deterministic():
    first = check_safety(TEXTBOOK_AVAILABLE, TEXTBOOK_NEED, TEXTBOOK_ALLOCATION)
    for _ in range(5):
        again = check_safety(TEXTBOOK_AVAILABLE, TEXTBOOK_NEED, TEXTBOOK_ALLOCATION)
        assert again == first, "Same input must give identical sequence and steps"


def test_format_helpers():
    result = check_safety(TEXTBOOK_AVAILABLE, TEXTBOOK_NEED, TEXTBOOK_ALLOCATION)
    assert format_sequence(result.sequence) == "P1 -> P3 -> P4 -> P0 -> P2"

    table = format_steps(result)
    print(table)
    lines = table.splitlines()
    assert "Need <= Work?" in lines[0]
    assert len(lines) == 2 + 5, "Header, rule, and one row per step"
    assert lines[-1].rstrip().endswith("[10, 5, 7]")

    unsafe = SafetyResult(safe=False, blocked=[0])
    assert "unavailable" in format_steps(unsafe)


def main():
    """Run all safety algorithm tests."""
    try:
        test_textbook_state_is_safe()
        test_textbook_step_trace()
        test_check_does_not_modify_inputs()
        test_all_zero_state_is_trivially_safe()
        test_unsafe_state_reports_nothing_partial()
        test_no_process_feasible()
        test_lowest_index_first_within_pass()
        test_safety_is_deterministic()
        test_format_helpers()
        print("\n✅ Safety Algorithm Tests PASSED")
        return 0
    except AssertionError as e:
        print(f"\n❌ TEST FAILED: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
