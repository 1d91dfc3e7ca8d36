"""
Result models for the Banker's Algorithm Evaluator.

Structured values handed back to the shell by the safety checker and the
request evaluator. The shell renders them; the core never prints.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class StepRecord:
    """
    One admission made by the safety search.

    Attributes:
        step: 1-based position of this admission in the safe sequence
        process: Index of the admitted process
        work_before: Work vector when the process was found feasible
        work_after: Work vector after the process released its allocation
    """
    step: int
    process: int
    work_before: List[int]
    work_after: List[int]


@dataclass(frozen=True)
class SafetyResult:
    """
    Outcome of a safety check.

    Attributes:
        safe: True if every process can finish in some order
        sequence: Safe completion order (empty if unsafe)
        steps: One StepRecord per entry of sequence (empty if unsafe)
        blocked: Processes that could not finish (empty if safe)
    """
    safe: bool
    sequence: List[int] = field(default_factory=list)
    steps: List[StepRecord] = field(default_factory=list)
    blocked: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class RequestDecision:
    """Grant/deny verdict produced by the request evaluator."""
    granted: bool
    reason: str
    safety_result: Optional[SafetyResult] = None


def format_process(index: int) -> str:
    """
    Label a process index for display.

    Labels use the 0-based index itself (P0, P1, ...), so they match the
    values in SafetyResult.sequence rather than a 1-based numbering.
    """
    return f"P{index}"


def format_vector(vector: List[int]) -> str:
    """Format a resource vector as ``[a, b, c]``."""
    return "[" + ", ".join(str(v) for v in vector) + "]"


def format_sequence(sequence: List[int]) -> str:
    """Format a safe sequence as ``P1 -> P3 -> P4``."""
    return " -> ".join(format_process(i) for i in sequence)


def format_steps(result: SafetyResult) -> str:
    """
    Render the step-by-step trace of a safe result as a text table.

    Args:
        result: Result returned by the safety checker

    Returns:
        Table with one row per admitted process, or a one-line notice
        when the state is unsafe
    """
    if not result.safe:
        return "No safe sequence - step trace unavailable"

    header = f"{'Step':>4}  {'Process':<8} {'Need <= Work?':<14} New Available (Work + Allocation)"
    lines = [header, "-" * len(header)]
    for record in result.steps:
        lines.append(
            f"{record.step:>4}  {format_process(record.process):<8} {'Yes':<14} "
            f"{format_vector(record.work_after)}"
        )
    return "\n".join(lines)
