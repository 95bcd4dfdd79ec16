"""
Spec Engine - Drives the iterate/select/execute/verify loop of a spec run
"""
import time
import logging
from typing import Any, Callable, Optional
from ..models import (
    Spec, SpecConf, Command, CommandOutput, RunResult,
    DEFAULT_ITERATIONS, DEFAULT_MAX_CMD_PER_ITER
)
from ..errors import (
    SpecError, ConfigurationError, SetupError, TeardownError,
    CommandExecutionError, VerificationError, InitStateError
)
from ..interfaces import ISpecEngine
from .random_source import resolve_random
from .run_logger import RunLogger
from .error_handler import ErrorHandler, ErrorContext, ErrorSeverity

logger = logging.getLogger(__name__)

# Consecutive declines allowed per command before an iteration ends early
TRIES_PER_COMMAND = 3


def _call_hook(hook: Callable[[], Optional[Exception]]) -> Optional[BaseException]:
    """Run a setup/teardown hook. A returned or raised exception is its error."""
    try:
        outcome = hook()
    except Exception as e:
        return e
    if isinstance(outcome, BaseException):
        return outcome
    return None


class SpecEngine(ISpecEngine):
    """
    Runs a Spec for a number of iterations. Each iteration starts from a
    fresh initial state and runs a random number of randomly selected
    commands, threading the state from one command to the next. The first
    command error or failed verification stops the whole run.
    """

    def __init__(self, run_logger: Optional[RunLogger] = None, error_handler: Optional[ErrorHandler] = None):
        self.run_logger = run_logger or RunLogger()
        self.error_handler = error_handler or ErrorHandler()

    def run(self, spec: Spec, conf: Optional[SpecConf] = None) -> RunResult:
        """
        Run every iteration of the spec.

        Returns a RunResult whose iterations field is the configured
        iteration count and whose error is the first error recorded, or None.
        """
        conf = conf or SpecConf()
        start_time = time.time()

        if len(spec.commands) == 0:
            return self._fail_fast(spec, ConfigurationError("spec.Run Commands is empty"), start_time)
        if spec.init_state is None:
            return self._fail_fast(spec, ConfigurationError("spec.InitState cannot be nil"), start_time)

        if spec.setup is not None:
            setup_err = _call_hook(spec.setup)
            if setup_err is not None:
                return self._fail_fast(spec, SetupError(setup_err), start_time)

        rnd, seed = resolve_random(conf)

        iterations = conf.iterations if conf.iterations >= 1 else DEFAULT_ITERATIONS
        max_cmd_per_iter = conf.max_cmd_per_iter if conf.max_cmd_per_iter >= 1 else DEFAULT_MAX_CMD_PER_ITER

        self.run_logger.log_run_start(spec.name, seed, iterations, max_cmd_per_iter)

        err: Optional[SpecError] = None
        iterations_completed = 0
        commands_executed = 0
        # it's possible that no command will want to run for a given state,
        # so cap consecutive declines before ending the iteration early
        max_tries = TRIES_PER_COMMAND * len(spec.commands)

        i = 0
        while i < iterations and err is None:
            try:
                state = spec.init_state()
            except Exception as e:
                err = InitStateError(i, e)
                break
            total_cmds_to_run = rnd.randint(1, max_cmd_per_iter)
            self.run_logger.log_iteration_start(i, total_cmds_to_run)
            cmd_run = 0
            tries = 0
            while cmd_run < total_cmds_to_run and tries < max_tries and err is None:
                cmd = spec.commands[rnd.randrange(len(spec.commands))]
                try:
                    cfunc = cmd.gen(state, rnd)
                except Exception as e:
                    err = CommandExecutionError(i, cmd_run, cmd.name, None, state, e)
                    self.run_logger.log_step(i, cmd_run, cmd.name, None, False)
                    break

                if cfunc is None:
                    self.run_logger.log_decline(i, cmd_run, cmd.name)
                    tries += 1
                    continue

                out = self._execute(cfunc, state)
                err = self._check(cmd, out, state, i, cmd_run)
                self.run_logger.log_step(i, cmd_run, cmd.name, out.description, err is None)

                state = out.new_state
                cmd_run += 1
                commands_executed += 1
                tries = 0

            if err is None:
                if cmd_run < total_cmds_to_run:
                    logger.debug(
                        f"Iteration {i}: ended after {cmd_run}/{total_cmds_to_run} commands, "
                        f"{max_tries} consecutive declines"
                    )
                iterations_completed += 1
            i += 1

        if err is not None:
            self._record(spec, err, ErrorSeverity.HIGH)

        if spec.teardown is not None:
            teardown_err = _call_hook(spec.teardown)
            if teardown_err is not None:
                if err is None:
                    err = TeardownError(teardown_err)
                    self._record(spec, err, ErrorSeverity.HIGH)
                else:
                    # keep the original error, teardown failure is only logged
                    self._record(spec, TeardownError(teardown_err), ErrorSeverity.MEDIUM)

        result = RunResult(
            iterations=iterations,
            error=err,
            seed=seed,
            iterations_completed=iterations_completed,
            commands_executed=commands_executed,
            start_time=start_time,
            end_time=time.time()
        )
        self.run_logger.log_run_completion(result)
        return result

    def _execute(self, cfunc, state: Any) -> CommandOutput:
        """Invoke a CommandFunc. A raised exception becomes the output's error."""
        try:
            out = cfunc()
        except Exception as e:
            return CommandOutput(new_state=state, description=None, error=e)
        if not isinstance(out, CommandOutput):
            return CommandOutput(
                new_state=state,
                description=out,
                error=TypeError(f"CommandFunc returned {type(out).__name__}, expected CommandOutput")
            )
        return out

    def _check(self, cmd: Command, out: CommandOutput, state: Any,
               iteration: int, step: int) -> Optional[SpecError]:
        """Return the error for an executed command, or None if it is consistent with the model"""
        if out.error is not None:
            return CommandExecutionError(iteration, step, cmd.name, out.description, state, out.error)

        if cmd.verify is not None:
            try:
                ok = cmd.verify(state, out.new_state)
            except Exception as e:
                return VerificationError(iteration, step, cmd.name, out.description, state, out.new_state, e)
            if not ok:
                return VerificationError(iteration, step, cmd.name, out.description, state, out.new_state)

        return None

    def _record(self, spec: Spec, err: SpecError, severity: ErrorSeverity) -> None:
        """Route an error through the error handler and the run log"""
        self.error_handler.handle_error(ErrorContext(
            category=err.category,
            severity=severity,
            message=str(err),
            exception=err,
            spec_name=spec.name,
            command=getattr(err, 'command', None),
            iteration=getattr(err, 'iteration', None),
            step=getattr(err, 'step', None)
        ))
        if severity == ErrorSeverity.HIGH:
            self.run_logger.log_error(str(err), {'category': err.category.value})

    def _fail_fast(self, spec: Spec, err: SpecError, start_time: float) -> RunResult:
        """Result for errors detected before any iteration"""
        self.error_handler.handle_error(ErrorContext(
            category=err.category,
            severity=ErrorSeverity.FATAL,
            message=str(err),
            exception=err,
            spec_name=spec.name
        ))
        return RunResult(iterations=0, error=err, start_time=start_time, end_time=time.time())
