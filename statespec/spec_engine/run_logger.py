"""
Run Logger - In-memory logging and reporting for spec runs
"""
import time
import logging
from typing import Any, Dict, List, Optional
from datetime import datetime
from ..interfaces import IRunLogger
from ..models import RunResult, StepRecord


logger = logging.getLogger(__name__)


class RunLogger(IRunLogger):
    """
    Records every selection, decline and execution of the current run.
    The trace is kept in memory only and replaced at the start of each run.
    """

    def __init__(self):
        self.current_run: Optional[Dict[str, Any]] = None
        self.trace: List[StepRecord] = []

    def log_run_start(self, spec_name: str, seed: Optional[int], iterations: int, max_cmd_per_iter: int) -> None:
        """Log the start of a run with its effective configuration."""
        self.trace = []
        self.current_run = {
            'spec_name': spec_name,
            'seed': seed,
            'iterations': iterations,
            'max_cmd_per_iter': max_cmd_per_iter,
            'start_time': time.time(),
            'start_timestamp': datetime.now().isoformat(),
            'planned_commands': [],
            'errors': [],
            'status': 'running'
        }

        logger.info(
            f"Running spec {spec_name}: {iterations} iterations, "
            f"max {max_cmd_per_iter} commands per iteration, seed {seed}"
        )

    def log_iteration_start(self, iteration: int, planned_commands: int) -> None:
        if self.current_run is not None:
            self.current_run['planned_commands'].append(planned_commands)
        logger.debug(f"Iteration {iteration}: planning {planned_commands} commands")

    def log_decline(self, iteration: int, step: int, command: str) -> None:
        self.trace.append(StepRecord(iteration=iteration, step=step, command=command, event='declined'))
        logger.debug(f"iter {iteration} step {step}: {command} declined")

    def log_step(self, iteration: int, step: int, command: str, description: Any, success: bool) -> None:
        event = 'executed' if success else 'failed'
        self.trace.append(StepRecord(
            iteration=iteration, step=step, command=command, event=event, description=description
        ))
        logger.debug(f"iter {iteration} step {step}: {command} {event} - {description!r}")

    def log_error(self, error_message: str, error_details: Optional[Dict[str, Any]] = None) -> None:
        """Log an error that ended the run."""
        if self.current_run is None:
            logger.warning("No active run to log error to")
            return

        self.current_run['errors'].append({
            'timestamp': time.time(),
            'message': error_message,
            'details': error_details or {}
        })

    def log_run_completion(self, result: RunResult) -> None:
        """Log the completion of a run with its final result."""
        if self.current_run is None:
            logger.warning("No active run to complete")
            return

        self.current_run.update({
            'end_time': result.end_time,
            'duration': result.end_time - result.start_time,
            'success': result.success,
            'iterations_completed': result.iterations_completed,
            'commands_executed': result.commands_executed,
            'final_error_message': str(result.error) if result.error else None,
            'status': 'completed' if result.success else 'failed'
        })

        logger.info(
            f"Completed spec {self.current_run['spec_name']} - {'SUCCESS' if result.success else 'FAILED'} "
            f"({result.iterations_completed}/{result.iterations} iterations, "
            f"{result.commands_executed} commands, {result.end_time - result.start_time:.2f}s)"
        )

    def get_trace(self) -> List[StepRecord]:
        return list(self.trace)

    def get_run_log(self) -> Optional[Dict[str, Any]]:
        """Get the log of the current or last run, or None if nothing ran."""
        return self.current_run

    def generate_report(self, results: List[RunResult]) -> str:
        """Generate a summary report from multiple runs."""
        if not results:
            return "No spec results to report"

        total_runs = len(results)
        successful_runs = sum(1 for result in results if result.success)
        failed_runs = total_runs - successful_runs

        total_iterations = sum(result.iterations_completed for result in results)
        total_commands = sum(result.commands_executed for result in results)
        total_duration = sum(result.end_time - result.start_time for result in results)

        report_lines = [
            "=" * 80,
            "STATESPEC - RUN REPORT",
            "=" * 80,
            "",
            f"Total Runs:         {total_runs}",
            f"Successful:         {successful_runs} ({successful_runs/total_runs*100:.1f}%)",
            f"Failed:             {failed_runs} ({failed_runs/total_runs*100:.1f}%)",
            "",
            f"Total Iterations:   {total_iterations}",
            f"Total Commands:     {total_commands}",
            f"Total Duration:     {total_duration:.2f}s",
            "",
            "=" * 80,
            "RUN DETAILS",
            "=" * 80,
            ""
        ]

        for result in results:
            status = "PASS" if result.success else "FAIL"
            report_lines.append(
                f"{status} | iterations: {result.iterations_completed}/{result.iterations} | "
                f"commands: {result.commands_executed}"
            )

            if result.error:
                report_lines.append(f"     Error: {result.error}")

            if result.seed is not None:
                report_lines.append(f"     Seed: {result.seed} (for reproduction)")

            report_lines.append("")

        report_lines.append("=" * 80)

        return "\n".join(report_lines)
