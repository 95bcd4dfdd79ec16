"""
Spec Engine - Execution of stateful specifications
"""
from .error_handler import ErrorHandler, ErrorContext, ErrorCategory, ErrorSeverity
from .random_source import resolve_random
from .run_logger import RunLogger
from .conf_loader import ConfLoader
from .spec_engine import SpecEngine

__all__ = [
    'SpecEngine',
    'RunLogger',
    'ErrorHandler',
    'ErrorContext',
    'ErrorCategory',
    'ErrorSeverity',
    'ConfLoader',
    'resolve_random',
]
