"""
Safety Algorithm for the Banker's Algorithm Evaluator.

Searches for a safe sequence: an order in which every process can obtain
its remaining Need, finish, and hand its Allocation back to the pool.
"""

import numpy as np

from models.results import SafetyResult, StepRecord


def check_safety(available, need, allocation) -> SafetyResult:
    """
    Check if a resource-allocation state is safe.

    Algorithm:
    1. Initialize Work = Available, Finish = [False] * num_processes
    2. Scan unfinished processes in ascending index order; admit every
       process i with Need[i] <= Work, setting Work += Allocation[i]
    3. Repeat the scan until a full pass admits nobody
    4. SAFE if every process finished, UNSAFE otherwise

    A single pass may admit several processes; the lowest eligible index
    always goes first, so the sequence is deterministic for a given input.

    Time Complexity: O(P²×R)

    Args:
        available: [R] free units of each resource type
        need: [P][R] remaining need per process
        allocation: [P][R] units held per process

    Returns:
        SafetyResult with the sequence and step trace, or an unsafe result
        with empty sequence/steps and the processes left unfinished
    """
    need = np.asarray(need, dtype=int)
    allocation = np.asarray(allocation, dtype=int)
    num_processes = need.shape[0]

    # Work is a private copy; the caller's Available is never touched
    work = np.array(available, dtype=int)
    finish = np.zeros(num_processes, dtype=bool)
    sequence = []
    steps = []

    made_progress = True
    while made_progress and not finish.all():
        made_progress = False

        for i in range(num_processes):
            if finish[i]:
                continue

            if np.all(need[i] <= work):
                work_before = work.tolist()
                work += allocation[i]
                finish[i] = True
                sequence.append(i)
                steps.append(StepRecord(
                    step=len(sequence),
                    process=i,
                    work_before=work_before,
                    work_after=work.tolist()
                ))
                made_progress = True

    if finish.all():
        return SafetyResult(safe=True, sequence=sequence, steps=steps)

    # Partial progress is discarded, only the stuck processes are reported
    blocked = [i for i in range(num_processes) if not finish[i]]
    return SafetyResult(safe=False, blocked=blocked)
