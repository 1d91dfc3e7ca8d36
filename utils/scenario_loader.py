"""
Scenario Loader for the Banker's Algorithm Evaluator.

Loads and validates JSON scenario files describing the initial matrices
and an optional script of requests and releases.
"""

import json
from typing import Any, Dict, List, Tuple

from banker import Banker


class ScenarioLoadError(Exception):
    """Exception raised when scenario file cannot be loaded or is invalid."""
    pass


def load_scenario(file_path: str) -> Tuple[Banker, List[Dict]]:
    """
    Load scenario from JSON file.

    Args:
        file_path: Path to scenario JSON file

    Returns:
        Tuple of (Banker, actions)
        - Banker: Configured with the scenario's Available/Max/Allocation
        - actions: Ordered list of {'type': 'request'|'release', 'process', 'amount'}

    Raises:
        ScenarioLoadError: If file cannot be loaded or is invalid
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ScenarioLoadError(f"Scenario file not found: {file_path}")
    except json.JSONDecodeError as e:
        raise ScenarioLoadError(f"Invalid JSON in scenario file: {e}")

    return build_scenario(data)


def build_scenario(data: Dict[str, Any]) -> Tuple[Banker, List[Dict]]:
    """
    Validate scenario data and build a configured Banker.

    Args:
        data: Parsed scenario dictionary

    Returns:
        Tuple of (Banker, actions), see load_scenario()

    Raises:
        ScenarioLoadError: If the scenario is invalid
    """
    if not isinstance(data, dict):
        raise ScenarioLoadError("Scenario must be a JSON object")

    for field in ('max', 'allocation'):
        if field not in data:
            raise ScenarioLoadError(f"Scenario missing '{field}' field")

    if ('available' in data) == ('total' in data):
        raise ScenarioLoadError("Scenario needs exactly one of 'available' or 'total'")

    max_matrix = _load_matrix(data['max'], 'max')
    num_processes = data.get('processes', len(max_matrix))
    if not max_matrix:
        raise ScenarioLoadError("'max' must have at least one row")
    num_resources = data.get('resources', len(max_matrix[0]))

    _check_count(num_processes, 'processes')
    _check_count(num_resources, 'resources')

    allocation_matrix = _load_matrix(data['allocation'], 'allocation')
    for name, matrix in (('max', max_matrix), ('allocation', allocation_matrix)):
        if len(matrix) != num_processes:
            raise ScenarioLoadError(
                f"'{name}' has {len(matrix)} rows, expected {num_processes}"
            )
        for i, row in enumerate(matrix):
            if len(row) != num_resources:
                raise ScenarioLoadError(
                    f"'{name}' row P{i} has {len(row)} entries, expected {num_resources}"
                )

    # Validate initial allocation doesn't exceed max demand
    for i, (alloc_row, max_row) in enumerate(zip(allocation_matrix, max_matrix)):
        for j, (alloc, max_d) in enumerate(zip(alloc_row, max_row)):
            if alloc > max_d:
                raise ScenarioLoadError(
                    f"Process P{i}: allocation[{j}] ({alloc}) exceeds max[{j}] ({max_d})"
                )

    if 'available' in data:
        available = _load_vector(data['available'], 'available', num_resources)
    else:
        total = _load_vector(data['total'], 'total', num_resources)
        available = _available_from_total(total, allocation_matrix)

    banker = Banker(num_processes, num_resources)
    banker.set_max(max_matrix)
    banker.set_allocation(allocation_matrix)
    banker.set_available(available)

    actions = [
        _load_action(item, idx, num_processes, num_resources)
        for idx, item in enumerate(data.get('requests', []))
    ]

    return banker, actions


def _check_count(value: Any, name: str) -> None:
    """Validate a process/resource count."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ScenarioLoadError(f"'{name}' must be a positive integer, got {value!r}")


def _check_value(value: Any, where: str) -> int:
    """Validate a single matrix entry as a non-negative integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ScenarioLoadError(f"{where}: expected a non-negative integer, got {value!r}")
    if value < 0:
        raise ScenarioLoadError(f"{where}: value cannot be negative ({value})")
    return value


def _load_vector(values: Any, name: str, length: int) -> List[int]:
    """Load a [R] vector of non-negative integers."""
    if not isinstance(values, list):
        raise ScenarioLoadError(f"'{name}' must be a list")
    if len(values) != length:
        raise ScenarioLoadError(f"'{name}' has {len(values)} entries, expected {length}")
    return [_check_value(v, f"{name}[{j}]") for j, v in enumerate(values)]


def _load_matrix(rows: Any, name: str) -> List[List[int]]:
    """Load a matrix of non-negative integers (shape checked by caller)."""
    if not isinstance(rows, list):
        raise ScenarioLoadError(f"'{name}' must be a list of rows")
    matrix = []
    for i, row in enumerate(rows):
        if not isinstance(row, list):
            raise ScenarioLoadError(f"'{name}' row P{i} must be a list")
        matrix.append([_check_value(v, f"{name}[{i}][{j}]") for j, v in enumerate(row)])
    return matrix


def _available_from_total(total: List[int], allocation_matrix: List[List[int]]) -> List[int]:
    """
    Derive Available = total - sum(allocation[:, r]).

    Critical validation: For each resource r, sum(allocation[:,r]) <= total[r]
    If this fails, the scenario is invalid.
    """
    available = []
    for r_idx, total_r in enumerate(total):
        allocated = sum(row[r_idx] for row in allocation_matrix)
        if allocated > total_r:
            raise ScenarioLoadError(
                f"VALIDATION FAILED: Resource R{r_idx} allocations ({allocated}) "
                f"exceed total instances ({total_r})"
            )
        available.append(total_r - allocated)
    return available


def _load_action(item: Any, idx: int, num_processes: int, num_resources: int) -> Dict:
    """
    Load one scripted request or release.

    Args:
        item: Action dictionary from the scenario
        idx: Position in the 'requests' list (for error messages)
        num_processes: Number of processes
        num_resources: Number of resource types

    Returns:
        Dictionary with 'type', 'process' and 'amount' (None = release all)
    """
    if not isinstance(item, dict):
        raise ScenarioLoadError(f"requests[{idx}] must be an object")
    if 'process' not in item:
        raise ScenarioLoadError(f"requests[{idx}] missing 'process' field")

    process = item['process']
    if isinstance(process, bool) or not isinstance(process, int) or not 0 <= process < num_processes:
        raise ScenarioLoadError(
            f"requests[{idx}]: invalid process {process!r} (expected 0..{num_processes - 1})"
        )

    if ('request' in item) == ('release' in item):
        raise ScenarioLoadError(f"requests[{idx}] needs exactly one of 'request' or 'release'")

    if 'request' in item:
        amount = _load_vector(item['request'], f"requests[{idx}].request", num_resources)
        return {'type': 'request', 'process': process, 'amount': amount}

    release = item['release']
    if release is None or release == 'all':
        return {'type': 'release', 'process': process, 'amount': None}
    amount = _load_vector(release, f"requests[{idx}].release", num_resources)
    return {'type': 'release', 'process': process, 'amount': amount}


def parse_request_arg(text: str, num_processes: int, num_resources: int) -> Dict:
    """
    Parse a command-line request of the form ``P:a,b,c``.

    Args:
        text: Argument text, e.g. "1:1,0,2"
        num_processes: Number of processes
        num_resources: Number of resource types

    Returns:
        Request action dictionary, see _load_action()

    Raises:
        ScenarioLoadError: If the text is malformed
    """
    process_text, sep, vector_text = text.partition(':')
    if not sep:
        raise ScenarioLoadError(f"Invalid request '{text}' (expected P:a,b,c)")
    try:
        process = int(process_text.strip().lstrip('Pp'))
        amount = [int(v) for v in vector_text.split(',')]
    except ValueError:
        raise ScenarioLoadError(f"Invalid request '{text}' (expected P:a,b,c)")
    return _load_action(
        {'process': process, 'request': amount}, 0, num_processes, num_resources
    )


def get_scenario_description(file_path: str) -> str:
    """
    Get description from scenario file without full loading.

    Args:
        file_path: Path to scenario JSON file

    Returns:
        Description string, or empty string if not present
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return ''
    if not isinstance(data, dict):
        return ''
    return data.get('description', '')
