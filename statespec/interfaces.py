"""
Base interfaces for the major components
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional
from .models import Spec, SpecConf, RunResult, StepRecord


class ISpecEngine(ABC):
    """Interface for the spec execution engine"""

    @abstractmethod
    def run(self, spec: Spec, conf: Optional[SpecConf] = None) -> RunResult:
        """Run every iteration of a spec and return the result"""
        pass


class IRunLogger(ABC):
    """Interface for run logging and reporting"""

    @abstractmethod
    def log_run_start(self, spec_name: str, seed: Optional[int], iterations: int, max_cmd_per_iter: int) -> None:
        """Log run start"""
        pass

    @abstractmethod
    def log_iteration_start(self, iteration: int, planned_commands: int) -> None:
        """Log the start of an iteration"""
        pass

    @abstractmethod
    def log_decline(self, iteration: int, step: int, command: str) -> None:
        """Log a command declining to run"""
        pass

    @abstractmethod
    def log_step(self, iteration: int, step: int, command: str, description: Any, success: bool) -> None:
        """Log an executed command"""
        pass

    @abstractmethod
    def log_run_completion(self, result: RunResult) -> None:
        """Log run completion"""
        pass

    @abstractmethod
    def get_trace(self) -> List[StepRecord]:
        """Return the recorded events of the current run"""
        pass

    @abstractmethod
    def generate_report(self, results: List[RunResult]) -> str:
        """Generate summary report"""
        pass
