"""
Error Handler - Centralized error recording for spec runs

Every failure the engine records is described by an ErrorContext and routed
through ErrorHandler, which logs it at a level matching its severity and
keeps a history for the run summary.
"""
import logging
from typing import Optional, Any, Dict, List
from enum import Enum
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for errors"""
    LOW = "low"  # Informational, run continues
    MEDIUM = "medium"  # Logged only, does not change the run result
    HIGH = "high"  # Fails the run
    FATAL = "fatal"  # Fails the run before any iteration


class ErrorCategory(Enum):
    """Categories of errors recorded by the engine"""
    CONFIGURATION = "configuration"
    SETUP = "setup"
    INIT_STATE = "init_state"
    COMMAND_EXECUTION = "command_execution"
    VERIFICATION = "verification"
    TEARDOWN = "teardown"


@dataclass
class ErrorContext:
    """Context information for an error"""
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    exception: Optional[BaseException] = None
    spec_name: Optional[str] = None
    command: Optional[str] = None
    iteration: Optional[int] = None
    step: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None


class ErrorHandler:
    """
    Centralized error handling for the spec engine.

    Provides:
    - Severity based logging
    - Error history for the run summary
    """

    def __init__(self):
        self.error_history: List[ErrorContext] = []

    def handle_error(self, error_context: ErrorContext) -> bool:
        """
        Log and record an error. Returns True for LOW and MEDIUM severity
        errors, False otherwise.
        """
        self._log_error(error_context)
        self.error_history.append(error_context)
        return error_context.severity in [ErrorSeverity.LOW, ErrorSeverity.MEDIUM]

    def _log_error(self, error_context: ErrorContext):
        """Log error with appropriate level based on severity"""
        log_message = f"[{error_context.category.value}] {error_context.message}"

        if error_context.spec_name:
            log_message = f"[{error_context.spec_name}] {log_message}"

        if error_context.command:
            log_message += f" (cmd: {error_context.command})"

        if error_context.iteration is not None:
            log_message += f" (iter: {error_context.iteration}, step: {error_context.step})"

        if error_context.severity == ErrorSeverity.FATAL:
            logger.critical(log_message)
        elif error_context.severity == ErrorSeverity.HIGH:
            logger.error(log_message)
        elif error_context.severity == ErrorSeverity.MEDIUM:
            logger.warning(log_message)
        else:
            logger.info(log_message)

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of all errors encountered"""
        errors_by_category = {}
        errors_by_severity = {}

        for error in self.error_history:
            category = error.category.value
            errors_by_category[category] = errors_by_category.get(category, 0) + 1

            severity = error.severity.value
            errors_by_severity[severity] = errors_by_severity.get(severity, 0) + 1

        return {
            'total_errors': len(self.error_history),
            'by_category': errors_by_category,
            'by_severity': errors_by_severity,
            'recent_errors': [
                {
                    'category': e.category.value,
                    'severity': e.severity.value,
                    'message': e.message
                }
                for e in self.error_history[-10:]
            ]
        }

    def clear_history(self):
        """Clear error history"""
        self.error_history.clear()
        logger.debug("Error history cleared")
