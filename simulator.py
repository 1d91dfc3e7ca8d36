#!/usr/bin/env python3
"""
Banker's Algorithm Evaluator
Main entry point: a console shell around the Banker core.

Loads a scenario, runs the initial safety check, then evaluates each
scripted request/release in order and prints the request log.
"""

import argparse
import sys
from typing import Dict, List, Optional

from banker import Banker
from models.results import format_process, format_vector
from utils.scenario_loader import load_scenario, parse_request_arg, ScenarioLoadError
from utils.logger import SimulatorLogger
from analysis.events import RequestLog


def run_evaluation(
    scenario_path: str,
    extra_requests: Optional[List[str]] = None,
    verbose: bool = False,
    show_steps: bool = False,
    log_file: Optional[str] = None
) -> Optional[RequestLog]:
    """
    Run a scenario through the Banker.

    Order of operations:
    1. Load and validate the scenario
    2. Run the initial safety check
    3. Apply scripted actions in file order, then command-line requests
    4. Print the request log (most recent first) and statistics

    Args:
        scenario_path: Path to scenario JSON file
        extra_requests: Requests given on the command line ("P:a,b,c")
        verbose: Enable verbose logging
        show_steps: Print the step-by-step safety trace
        log_file: Optional file to mirror the log into

    Returns:
        The Banker's request log, or None if the scenario failed to load
    """
    logger = SimulatorLogger(verbose=verbose, log_file=log_file)

    try:
        try:
            banker, actions = load_scenario(scenario_path)
            for text in extra_requests or []:
                actions.append(parse_request_arg(text, banker.num_processes, banker.num_resources))
        except ScenarioLoadError as e:
            logger.log(f"Failed to load scenario: {e}", "error")
            return None

        logger.log(f"\n{'='*60}")
        logger.log("BANKER'S ALGORITHM")
        logger.log(f"Scenario: {scenario_path}")
        logger.log(f"{'='*60}\n")

        logger.log(banker.display())

        logger.log("\nInitial Safety Check:")
        result = banker.check_safety()
        logger.log_safety_result(result, show_steps)

        for action in actions:
            logger.log(f"\n{'-'*60}")
            _apply_action(banker, action, logger, show_steps)
            logger.log_state(banker.display())

        logger.log(f"\n{'='*60}")
        logger.log("REQUEST LOG (most recent first)")
        logger.log(f"{'='*60}")
        if banker.log.entries:
            logger.log(banker.log.display())
        else:
            logger.log("  (no requests)")

        _display_statistics(banker, logger)
        return banker.log
    finally:
        logger.close()


def _apply_action(banker: Banker, action: Dict, logger: SimulatorLogger, show_steps: bool) -> None:
    """
    Apply one scripted request or release.

    Args:
        banker: Banker under evaluation
        action: Action dictionary from the scenario loader
        logger: Logger instance
        show_steps: Print the step-by-step trace after a grant
    """
    process = action['process']

    if action['type'] == 'request':
        logger.log(f"{format_process(process)} requests {format_vector(action['amount'])}")
        outcome = banker.submit_request(process, action['amount'])
        logger.log_request(outcome.log_entry)
        if outcome.granted:
            logger.log(f"  Available now: {format_vector(banker.available)}")
            logger.log_safety_result(outcome.safety_result, show_steps)
        else:
            logger.log(f"  Available unchanged: {format_vector(banker.available)}", "debug")

    elif action['type'] == 'release':
        released, reason = banker.release(process, action['amount'])
        logger.log_release(process, released, reason)
        if released:
            logger.log(f"  Available now: {format_vector(banker.available)}")


def _display_statistics(banker: Banker, logger: SimulatorLogger) -> None:
    """Display final request statistics."""
    logger.log("\nStatistics:")
    logger.log(f"  Requests: {len(banker.log.entries)}")
    logger.log(f"  Granted: {banker.log.granted_count()}")
    logger.log(f"  Denied: {banker.log.denied_count()}")
    logger.log(f"  Final Available: {format_vector(banker.available)}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the evaluator."""
    parser = argparse.ArgumentParser(
        description="Banker's Algorithm Evaluator"
    )
    parser.add_argument(
        '--scenario',
        type=str,
        required=True,
        help='Path to scenario JSON file'
    )
    parser.add_argument(
        '--request',
        action='append',
        default=[],
        metavar='P:a,b,c',
        help='Extra request to evaluate after the scenario script (repeatable)'
    )
    parser.add_argument(
        '--steps',
        action='store_true',
        help='Print the step-by-step safety trace'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write the log to this file'
    )

    args = parser.parse_args(argv)

    request_log = run_evaluation(
        args.scenario,
        extra_requests=args.request,
        verbose=args.verbose,
        show_steps=args.steps,
        log_file=args.log_file
    )
    return 0 if request_log is not None else 1


if __name__ == '__main__':
    sys.exit(main())
