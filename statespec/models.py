"""
Core data models for statespec
"""
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import SpecError

S = TypeVar('S')

DEFAULT_ITERATIONS = 100
DEFAULT_MAX_CMD_PER_ITER = 20


@dataclass
class CommandOutput(Generic[S]):
    """Result of running a CommandFunc against the system under test"""
    new_state: S
    # Usually the input that was sent. Echoed in failure reports.
    description: Any = None
    # Non-None means the spec was violated and the run stops
    error: Optional[BaseException] = None


CommandFunc = Callable[[], CommandOutput[S]]


@dataclass(frozen=True)
class Command(Generic[S]):
    """
    A single side effecting action against the system under test.

    gen is passed the current state, which it must not mutate, and the run's
    RNG. It returns None to decline (the command cannot run in this state) or
    a CommandFunc that performs the call and returns the expected new state.

    verify is optional. It compares the state before the command with the
    state the command returned and returns False if the model was violated.
    """
    name: str
    gen: Callable[[S, random.Random], Optional[CommandFunc]]
    verify: Optional[Callable[[S, S], bool]] = None


@dataclass
class Spec(Generic[S]):
    """
    A stateful specification: the commands that may run, the initial state
    factory run at the start of every iteration, and optional setup/teardown
    hooks run once around all iterations.

    Hooks signal failure by returning or raising an exception.
    """
    commands: List[Command[S]] = field(default_factory=list)
    init_state: Optional[Callable[[], S]] = None
    setup: Optional[Callable[[], Optional[Exception]]] = None
    teardown: Optional[Callable[[], Optional[Exception]]] = None
    name: str = "spec"

    def run(self, conf: Optional['SpecConf'] = None) -> 'RunResult':
        """Run this spec with a fresh SpecEngine"""
        from .spec_engine import SpecEngine
        return SpecEngine().run(self, conf)


@dataclass
class SpecConf:
    """Configuration on how to run a Spec"""
    # RNG passed to Command.gen. Takes precedence over seed.
    rand: Optional[random.Random] = None
    # Seed for a new RNG when rand is not given. Chosen from the clock if None.
    seed: Optional[int] = None
    # Number of iterations, DEFAULT_ITERATIONS if < 1
    iterations: int = 0
    # Max commands per iteration, DEFAULT_MAX_CMD_PER_ITER if < 1
    max_cmd_per_iter: int = 0


@dataclass
class StepRecord:
    """One event in a run trace"""
    iteration: int
    step: int
    command: str
    event: str  # "declined", "executed" or "failed"
    description: Any = None


@dataclass
class RunResult:
    """Result of a spec run"""
    # Configured (or defaulted) iteration count, not the number completed
    iterations: int
    error: Optional['SpecError'] = None
    seed: Optional[int] = None
    iterations_completed: int = 0
    commands_executed: int = 0
    start_time: float = 0.0
    end_time: float = 0.0

    @property
    def success(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the recorded error, if any"""
        if self.error is not None:
            raise self.error
