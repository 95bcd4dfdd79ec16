"""
Error types returned by a spec run

Every failure the engine detects is reported as one of these exceptions,
carried as data on RunResult.error rather than raised.
"""
from typing import Any, Optional

from .spec_engine.error_handler import ErrorCategory


class SpecError(Exception):
    """Base class for all errors recorded during a spec run"""

    category = ErrorCategory.CONFIGURATION

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class ConfigurationError(SpecError):
    """Spec is missing commands or an initial state factory"""

    category = ErrorCategory.CONFIGURATION


class SetupError(SpecError):
    """Spec.setup failed, no iterations were run"""

    category = ErrorCategory.SETUP

    def __init__(self, cause: BaseException):
        super().__init__(f"spec.Run Setup error: {cause}", cause)


class TeardownError(SpecError):
    """Spec.teardown failed after an otherwise clean run"""

    category = ErrorCategory.TEARDOWN

    def __init__(self, cause: BaseException):
        super().__init__(f"spec.Run TearDown error: {cause}", cause)


class CommandExecutionError(SpecError):
    """A command's action reported an error against the system under test"""

    category = ErrorCategory.COMMAND_EXECUTION

    def __init__(self, iteration: int, step: int, command: str, description: Any,
                 state: Any, cause: BaseException):
        self.iteration = iteration
        self.step = step
        self.command = command
        self.description = description
        self.state = state
        super().__init__(
            f"spec.Run failed iter: {iteration} step: {step} cmd error - "
            f"cmd={command} {description!r} state={state!r} err={cause}",
            cause
        )


class VerificationError(SpecError):
    """A command's verify step rejected the new state"""

    category = ErrorCategory.VERIFICATION

    def __init__(self, iteration: int, step: int, command: str, description: Any,
                 old_state: Any, new_state: Any, cause: Optional[BaseException] = None):
        self.iteration = iteration
        self.step = step
        self.command = command
        self.description = description
        self.old_state = old_state
        self.new_state = new_state
        super().__init__(
            f"spec.Run failed iter: {iteration} step: {step} verify false - "
            f"cmd={command} {description!r} oldState={old_state!r} newState={new_state!r}",
            cause
        )


class InitStateError(SpecError):
    """Spec.init_state raised at the start of an iteration"""

    category = ErrorCategory.INIT_STATE

    def __init__(self, iteration: int, cause: BaseException):
        self.iteration = iteration
        super().__init__(f"spec.Run InitState error iter: {iteration}: {cause}", cause)
