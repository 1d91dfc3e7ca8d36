"""
Logger utility for the Banker's Algorithm Evaluator.

Provides console (and optional file) logging with verbosity levels.
"""

from typing import Optional
from datetime import datetime

from models.results import SafetyResult, format_process, format_sequence, format_steps, format_vector
from analysis.events import RequestLogEntry


class SimulatorLogger:
    """
    Logger for evaluator events and decisions.

    Format: "Request #k: PY requests [a, b, c] - GRANTED/DENIED (reason)"
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Initialize logger.

        Args:
            verbose: Enable verbose output
            log_file: Optional file path for logging
        """
        self.verbose = verbose
        self.log_file = log_file
        self.file_handle = None

        if self.log_file:
            self.file_handle = open(self.log_file, 'w', encoding='utf-8')
            self._write_header()

    def _write_header(self) -> None:
        """Write log file header."""
        if self.file_handle:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self.file_handle.write(f"Banker's Algorithm Log - {timestamp}\n")
            self.file_handle.write("="*60 + "\n\n")

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message.

        Args:
            message: Message to log
            level: Log level (info, debug, warning, error)
        """
        if level == "debug" and not self.verbose:
            return

        formatted = self._format_message(message, level)

        print(formatted)

        if self.file_handle:
            self.file_handle.write(formatted + "\n")
            self.file_handle.flush()

    def _format_message(self, message: str, level: str) -> str:
        """Format message with level prefix."""
        if level == "error":
            return f"[ERROR] {message}"
        elif level == "warning":
            return f"[WARNING] {message}"
        elif level == "debug":
            return f"[DEBUG] {message}"
        else:
            return message

    def log_request(self, entry: RequestLogEntry) -> None:
        """Log an evaluated request."""
        self.log(str(entry))

    def log_release(self, process: int, released: bool, reason: str) -> None:
        """
        Log a release attempt.

        Args:
            process: Index of the releasing process
            released: Whether the release was applied
            reason: Outcome description
        """
        if released:
            self.log(f"{format_process(process)} releases resources - {reason}")
        else:
            self.log(f"{format_process(process)} release rejected - {reason}", "warning")

    def log_safety_result(self, result: SafetyResult, show_steps: bool = False) -> None:
        """
        Log the outcome of a safety check.

        Args:
            result: Result from the safety algorithm
            show_steps: Also print the step-by-step trace table
        """
        if result.safe:
            self.log("SYSTEM STATUS: SAFE")
            self.log(f"Safe Sequence: {format_sequence(result.sequence)}")
            if show_steps:
                self.log(format_steps(result))
            for record in result.steps:
                self.log(
                    f"  Step {record.step}: {format_process(record.process)} "
                    f"work {format_vector(record.work_before)} -> {format_vector(record.work_after)}",
                    "debug"
                )
        else:
            self.log("SYSTEM STATUS: UNSAFE (Deadlock may occur)")
            blocked = ", ".join(format_process(i) for i in result.blocked)
            self.log(f"Unfinished processes: [{blocked}]", "debug")

    def log_state(self, state_str: str) -> None:
        """
        Log a matrix snapshot (verbose only).

        Args:
            state_str: Formatted system state
        """
        if self.verbose:
            self.log(f"System State:\n{state_str}")

    def close(self) -> None:
        """Close log file if open."""
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None

    def __del__(self):
        """Cleanup on destruction."""
        self.close()
