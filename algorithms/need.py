"""
Need derivation for the Banker's Algorithm Evaluator.

Need[i][j] = Max[i][j] - Allocation[i][j]: the units process i may still
request of resource j before reaching its declared maximum.
"""

import numpy as np


def derive_need(max_matrix: np.ndarray, allocation_matrix: np.ndarray) -> np.ndarray:
    """
    Compute the Need matrix element-wise.

    No validation is performed: a negative entry means the caller handed in
    an Allocation that exceeds Max, and it is passed through unchanged.

    Args:
        max_matrix: [P][R] maximum demand per process
        allocation_matrix: [P][R] units currently held per process

    Returns:
        New [P][R] integer matrix (inputs are not modified)
    """
    return np.asarray(max_matrix, dtype=int) - np.asarray(allocation_matrix, dtype=int)
