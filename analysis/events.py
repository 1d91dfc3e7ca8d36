"""
Request Log for the Banker's Algorithm Evaluator.

Records every evaluated request, granted or denied, with a sequential id.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from models.results import SafetyResult, format_process, format_vector


@dataclass(frozen=True)
class RequestLogEntry:
    """
    Represents a single evaluated request.

    Attributes:
        id: Sequential id, starting at 1
        process: Index of the requesting process
        request: [R] units requested
        granted: Whether the request was granted
        reason: Reason for the decision
    """
    id: int
    process: int
    request: List[int]
    granted: bool
    reason: str

    def __str__(self) -> str:
        """Format entry for logging."""
        status = "GRANTED" if self.granted else "DENIED"
        return (
            f"Request #{self.id}: {format_process(self.process)} requests "
            f"{format_vector(self.request)} - {status} ({self.reason})"
        )


@dataclass(frozen=True)
class RequestOutcome:
    """
    Result of submitting a request to the evaluator.

    Attributes:
        granted: Whether the request was granted
        reason: Reason for the decision
        safety_result: Safety check of the new state (granted requests only)
        log_entry: The entry appended to the request log
    """
    granted: bool
    reason: str
    safety_result: Optional[SafetyResult]
    log_entry: RequestLogEntry


@dataclass
class RequestLog:
    """Append-only collection of evaluated requests."""
    entries: List[RequestLogEntry] = field(default_factory=list)

    def record(self, process: int, request: List[int], granted: bool, reason: str) -> RequestLogEntry:
        """Append a new entry with the next sequential id and return it."""
        entry = RequestLogEntry(
            id=len(self.entries) + 1,
            process=process,
            request=list(request),
            granted=granted,
            reason=reason
        )
        self.entries.append(entry)
        return entry

    def most_recent_first(self) -> List[RequestLogEntry]:
        """Get all entries, newest first."""
        return list(reversed(self.entries))

    def granted_count(self) -> int:
        """Number of granted requests."""
        return sum(1 for e in self.entries if e.granted)

    def denied_count(self) -> int:
        """Number of denied requests."""
        return sum(1 for e in self.entries if not e.granted)

    def display(self) -> str:
        """Format all entries for display, newest first."""
        return "\n".join(str(entry) for entry in self.most_recent_first())
