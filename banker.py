"""
Banker's Algorithm Evaluator core.

The Banker owns one MatrixStore and the request log, and exposes the
operations a shell needs: configure, bulk-set matrices, check safety,
submit requests, release resources, and read the current state back.
"""

import threading
from typing import List, Tuple

from models.matrix_store import MatrixStore
from models.results import SafetyResult
from algorithms.safety import check_safety
from algorithms.avoidance import handle_request, handle_release
from analysis.events import RequestLog, RequestLogEntry, RequestOutcome


class Banker:
    """
    One evaluation session of Banker's Algorithm.

    Every operation and accessor takes a per-instance lock, so the
    tentative allocation made while evaluating a request is never observed
    or interleaved by another caller sharing the same Banker.
    """

    def __init__(self, num_processes: int = 1, num_resources: int = 1):
        """
        Create a session with zeroed matrices.

        Args:
            num_processes: Number of processes (P >= 1)
            num_resources: Number of resource types (R >= 1)

        Raises:
            ValueError: If either count is not a positive integer
        """
        self._lock = threading.RLock()
        self._store = MatrixStore(num_processes, num_resources)
        self._log = RequestLog()

    def configure(self, num_processes: int, num_resources: int) -> Tuple[bool, str]:
        """
        Reset the session to zeroed matrices of new dimensions.

        The request log is discarded along with the old state. A rejected
        configuration leaves everything as it was.

        Args:
            num_processes: Number of processes (P >= 1)
            num_resources: Number of resource types (R >= 1)

        Returns:
            Tuple of (accepted, reason_string)
        """
        try:
            store = MatrixStore(num_processes, num_resources)
        except ValueError as e:
            return False, f"Configuration rejected: {e}"

        with self._lock:
            self._store = store
            self._log = RequestLog()
        return True, f"Configured {num_processes} processes x {num_resources} resource types"

    @property
    def num_processes(self) -> int:
        with self._lock:
            return self._store.num_processes

    @property
    def num_resources(self) -> int:
        with self._lock:
            return self._store.num_resources

    def set_available(self, vector) -> None:
        """Bulk-set the Available vector (length R)."""
        with self._lock:
            self._store.set_available(vector)

    def set_max(self, matrix) -> None:
        """Bulk-set the Max matrix (P x R)."""
        with self._lock:
            self._store.set_max(matrix)

    def set_allocation(self, matrix) -> None:
        """Bulk-set the Allocation matrix (P x R)."""
        with self._lock:
            self._store.set_allocation(matrix)

    def check_safety(self) -> SafetyResult:
        """Recompute Need and run the safety algorithm on the current state."""
        with self._lock:
            store = self._store
            store.refresh_matrices()
            return check_safety(store.available_vector, store.need_matrix, store.allocation_matrix)

    def submit_request(self, process: int, request) -> RequestOutcome:
        """
        Evaluate a resource request and record it in the request log.

        Every call that gets past argument validation produces exactly one
        log entry, whether the request is granted or denied.

        Args:
            process: Index of the requesting process
            request: [R] units requested of each resource type

        Returns:
            RequestOutcome with the decision and its log entry

        Raises:
            ValueError: If process is out of range, or request has the wrong
                length, a negative entry or a non-integer entry
        """
        with self._lock:
            decision = handle_request(self._store, process, request)
            entry = self._log.record(
                process=int(process),
                request=[int(v) for v in request],
                granted=decision.granted,
                reason=decision.reason
            )
            return RequestOutcome(
                granted=decision.granted,
                reason=decision.reason,
                safety_result=decision.safety_result,
                log_entry=entry
            )

    def release(self, process: int, amount=None) -> Tuple[bool, str]:
        """
        Return resources held by a process to the Available pool.

        Args:
            process: Index of the releasing process
            amount: [R] units to release, or None to release everything held

        Returns:
            Tuple of (released, reason_string)

        Raises:
            ValueError: If process is out of range or amount has the wrong length
        """
        with self._lock:
            return handle_release(self._store, process, amount)

    @property
    def available(self) -> List[int]:
        with self._lock:
            return self._store.available_vector.tolist()

    @property
    def max_demand(self) -> List[List[int]]:
        with self._lock:
            return self._store.max_demand_matrix.tolist()

    @property
    def allocation(self) -> List[List[int]]:
        with self._lock:
            return self._store.allocation_matrix.tolist()

    @property
    def need(self) -> List[List[int]]:
        with self._lock:
            return self._store.need_matrix.tolist()

    @property
    def request_log(self) -> List[RequestLogEntry]:
        """Request log entries, most recent first."""
        with self._lock:
            return self._log.most_recent_first()

    @property
    def log(self) -> RequestLog:
        with self._lock:
            return self._log

    def precondition_violations(self, total_instances=None) -> List[str]:
        """See MatrixStore.precondition_violations()."""
        with self._lock:
            return self._store.precondition_violations(total_instances)

    def display(self) -> str:
        """Render the current matrices as text."""
        with self._lock:
            return self._store.display()
