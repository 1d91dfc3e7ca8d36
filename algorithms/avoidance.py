"""
Deadlock Avoidance (Banker's Algorithm request handling) for the Evaluator.

A request is granted only if the state reached by granting it is safe.
"""

import numpy as np

from models.matrix_store import MatrixStore
from models.results import RequestDecision, format_sequence, format_vector
from algorithms.safety import check_safety


REASON_EXCEEDS_NEED = "Request exceeds declared maximum need"
REASON_NOT_AVAILABLE = "Resources not currently available"
REASON_UNSAFE = "Granting would lead to an unsafe state"


def handle_request(store: MatrixStore, process: int, request) -> RequestDecision:
    """
    Handle a resource request using Banker's Algorithm.

    Steps:
    1. Validate: request <= Need[process] (otherwise deny)
    2. Check: request <= Available (otherwise deny)
    3. Tentatively allocate resources
    4. Run safety algorithm on new state
    5. If safe: keep the allocation
       If unsafe: restore Available and Allocation[process] exactly

    Need is recomputed before step 1. Steps 1-2 never mutate the store
    and never run the safety check.

    Args:
        store: Matrix store to evaluate against (mutated on grant)
        process: Index of the requesting process
        request: [R] units requested of each resource type

    Returns:
        RequestDecision; safety_result is set only on a grant

    Raises:
        ValueError: If process is out of range, or request has the wrong
            length or a negative entry
    """
    store.check_process_index(process)
    request = store.as_vector(request, "request")
    if np.any(request < 0):
        raise ValueError(f"Request amounts must be non-negative, got {format_vector(request.tolist())}")
    store.refresh_matrices()

    # Step 1: Need = Max - Allocation
    if np.any(request > store.need_matrix[process]):
        return RequestDecision(granted=False, reason=REASON_EXCEEDS_NEED)

    # Step 2: resources must be free right now
    if np.any(request > store.available_vector):
        return RequestDecision(granted=False, reason=REASON_NOT_AVAILABLE)

    # Step 3: Tentatively allocate resources
    saved = store.snapshot(process)
    store.available_vector[:] -= request
    store.allocation_matrix[process] += request
    store.refresh_matrices()

    # Step 4: Run safety algorithm
    result = check_safety(store.available_vector, store.need_matrix, store.allocation_matrix)

    # Step 5: Commit or rollback
    if result.safe:
        return RequestDecision(
            granted=True,
            reason=f"New state remains safe. Safe sequence: {format_sequence(result.sequence)}",
            safety_result=result
        )

    store.restore(saved)
    return RequestDecision(granted=False, reason=REASON_UNSAFE)


def handle_release(store: MatrixStore, process: int, amount=None):
    """
    Return units held by a process to the Available pool.

    Args:
        store: Matrix store to mutate
        process: Index of the releasing process
        amount: [R] units to release, or None to release the whole
            Allocation row (the process has completed)

    Returns:
        Tuple of (released, reason_string)

    Raises:
        ValueError: If process is out of range or amount has the wrong length
    """
    store.check_process_index(process)
    held = store.allocation_matrix[process]

    if amount is None:
        amount = held.copy()
    else:
        amount = store.as_vector(amount, "release")

    if np.any(amount < 0):
        return False, "Release amounts must be non-negative"

    if np.any(amount > held):
        return False, f"Cannot release more than held (holding {format_vector(held.tolist())})"

    store.allocation_matrix[process] -= amount
    store.available_vector[:] += amount
    store.refresh_matrices()

    return True, f"Released {format_vector(amount.tolist())}"
