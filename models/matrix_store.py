"""
Matrix Store for the Banker's Algorithm Evaluator.

Holds the matrices and vectors required by Banker's Algorithm for a fixed
number of processes and resource types.
"""

import numpy as np
from typing import Dict, List, Optional

from algorithms.need import derive_need


class MatrixStore:
    """
    Resource-allocation state of one evaluation session.

    All matrices start zeroed. Need is never set directly: it is derived
    from Max and Allocation and recomputed after every mutation.

    Attributes:
        available_vector: [R] free units of each resource type
        max_demand_matrix: [P][R] maximum demand declared by each process
        allocation_matrix: [P][R] units currently held by each process
        need_matrix: [P][R] computed as Max - Allocation
    """

    def __init__(self, num_processes: int, num_resources: int):
        """
        Create a zeroed store.

        Args:
            num_processes: Number of processes (P >= 1)
            num_resources: Number of resource types (R >= 1)

        Raises:
            ValueError: If either count is not a positive integer
        """
        for name, value in (("num_processes", num_processes), ("num_resources", num_resources)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

        self._num_processes = num_processes
        self._num_resources = num_resources
        self._available_vector = np.zeros(num_resources, dtype=int)
        self._max_demand_matrix = np.zeros((num_processes, num_resources), dtype=int)
        self._allocation_matrix = np.zeros((num_processes, num_resources), dtype=int)
        self._need_matrix: Optional[np.ndarray] = None

    @property
    def num_processes(self) -> int:
        """Number of processes in the system."""
        return self._num_processes

    @property
    def num_resources(self) -> int:
        """Number of resource types in the system."""
        return self._num_resources

    @property
    def available_vector(self) -> np.ndarray:
        """Get available resources vector [R]."""
        return self._available_vector

    @property
    def max_demand_matrix(self) -> np.ndarray:
        """Get max demand matrix [P][R]."""
        return self._max_demand_matrix

    @property
    def allocation_matrix(self) -> np.ndarray:
        """Get allocation matrix [P][R]."""
        return self._allocation_matrix

    @property
    def need_matrix(self) -> np.ndarray:
        """
        Get need matrix [P][R].
        Computed as: Need = Max - Allocation
        """
        if self._need_matrix is None:
            self._need_matrix = derive_need(self._max_demand_matrix, self._allocation_matrix)
        return self._need_matrix

    def set_available(self, vector) -> None:
        """Replace the Available vector."""
        self._available_vector = self._as_array(vector, (self._num_resources,), "available")
        self.refresh_matrices()

    def set_max(self, matrix) -> None:
        """Replace the Max matrix."""
        self._max_demand_matrix = self._as_array(
            matrix, (self._num_processes, self._num_resources), "max"
        )
        self.refresh_matrices()

    def set_allocation(self, matrix) -> None:
        """Replace the Allocation matrix."""
        self._allocation_matrix = self._as_array(
            matrix, (self._num_processes, self._num_resources), "allocation"
        )
        self.refresh_matrices()

    def _as_array(self, values, shape: tuple, name: str) -> np.ndarray:
        """Copy caller data into an integer array of the expected shape."""
        raw = np.array(values)
        if raw.shape != shape:
            raise ValueError(f"{name} must have shape {shape}, got {raw.shape}")
        if raw.dtype.kind not in "iuf":
            raise ValueError(f"{name} must contain integers, got dtype {raw.dtype}")
        array = raw.astype(int)
        if not np.array_equal(raw, array):
            raise ValueError(f"{name} must contain integers, got {raw.tolist()}")
        return array

    def check_process_index(self, process: int) -> None:
        """
        Validate a process index.

        Raises:
            ValueError: If process is not in range [0, P)
        """
        if isinstance(process, bool) or not isinstance(process, (int, np.integer)):
            raise ValueError(f"Process index must be an integer, got {process!r}")
        if process < 0 or process >= self._num_processes:
            raise ValueError(
                f"Process index {process} out of range (0..{self._num_processes - 1})"
            )

    def as_vector(self, values, name: str) -> np.ndarray:
        """Copy a caller-supplied [R] vector, validating its length."""
        return self._as_array(values, (self._num_resources,), name)

    def refresh_matrices(self) -> None:
        """Drop derived matrices so they are recomputed on next access."""
        self._need_matrix = None

    def snapshot(self, process: int) -> Dict:
        """
        Capture the state a request by one process can mutate.

        Only Available and the requesting process's Allocation row are
        copied; nothing else is touched by a tentative allocation.

        Args:
            process: Index of the requesting process

        Returns:
            Dictionary used by restore()
        """
        return {
            'process': process,
            'available_vector': self._available_vector.copy(),
            'allocation_row': self._allocation_matrix[process].copy(),
        }

    def restore(self, snapshot: Dict) -> None:
        """
        Restore Available and one Allocation row from snapshot().

        Args:
            snapshot: State dictionary from previous snapshot()
        """
        self._available_vector = snapshot['available_vector'].copy()
        self._allocation_matrix[snapshot['process']] = snapshot['allocation_row']
        self.refresh_matrices()

    def precondition_violations(self, total_instances=None) -> List[str]:
        """
        List the ways the current state breaks the algorithm's assumptions.

        Nothing is corrected; callers decide whether to reject the state.

        Args:
            total_instances: Optional [R] system totals; when given, checks
                sum(Allocation[:, r]) + Available[r] == total[r]

        Returns:
            Human-readable violation messages (empty if none)
        """
        violations = []

        for r_idx in range(self._num_resources):
            if self._available_vector[r_idx] < 0:
                violations.append(
                    f"Available R{r_idx} is negative ({self._available_vector[r_idx]})"
                )

        for name, matrix in (("Max", self._max_demand_matrix), ("Allocation", self._allocation_matrix)):
            for i, j in zip(*np.nonzero(matrix < 0)):
                violations.append(f"{name} P{i} R{j} is negative ({matrix[i][j]})")

        for i, j in zip(*np.nonzero(self._allocation_matrix > self._max_demand_matrix)):
            violations.append(
                f"Allocation P{i} R{j} ({self._allocation_matrix[i][j]}) "
                f"exceeds Max ({self._max_demand_matrix[i][j]})"
            )

        if total_instances is not None:
            total = self.as_vector(total_instances, "total")
            allocated = self._allocation_matrix.sum(axis=0)
            for r_idx in range(self._num_resources):
                if allocated[r_idx] + self._available_vector[r_idx] != total[r_idx]:
                    violations.append(
                        f"R{r_idx} conservation violated: allocated={allocated[r_idx]} + "
                        f"available={self._available_vector[r_idx]} != total={total[r_idx]}"
                    )

        return violations

    def display(self) -> str:
        """
        Generate readable string representation of the store.

        Returns:
            Formatted string showing all matrices and vectors
        """
        output = []
        output.append("\n" + "="*60)
        output.append("SYSTEM STATE")
        output.append("="*60)

        output.append("\nAvailable Resources:")
        output.append(
            "  [" + ", ".join(
                f"R{j}:{self._available_vector[j]:2}" for j in range(self._num_resources)
            ) + "]"
        )

        for title, matrix in (
            ("Max Demand Matrix", self._max_demand_matrix),
            ("Allocation Matrix", self._allocation_matrix),
            ("Need Matrix (Max - Allocation)", self.need_matrix),
        ):
            output.append(f"\n{title}:")
            output.append("     " + " ".join([f"R{j:2}" for j in range(self._num_resources)]))
            for i in range(self._num_processes):
                row = f"  P{i}: "
                row += " ".join([f"{matrix[i][j]:3}" for j in range(self._num_resources)])
                output.append(row)

        output.append("\n" + "="*60)
        return "\n".join(output)
