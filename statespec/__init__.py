"""
statespec - stateful generative testing of side-effecting systems
"""
from .spec_engine import SpecEngine, RunLogger, ConfLoader
from .models import Command, CommandOutput, CommandFunc, Spec, SpecConf, RunResult, StepRecord
from .errors import (
    SpecError, ConfigurationError, SetupError, TeardownError,
    CommandExecutionError, VerificationError, InitStateError
)

__version__ = "0.1.0"

__all__ = [
    'Command',
    'CommandOutput',
    'CommandFunc',
    'Spec',
    'SpecConf',
    'RunResult',
    'StepRecord',
    'SpecEngine',
    'RunLogger',
    'ConfLoader',
    'SpecError',
    'ConfigurationError',
    'SetupError',
    'TeardownError',
    'CommandExecutionError',
    'VerificationError',
    'InitStateError',
]
