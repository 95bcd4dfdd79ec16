"""
Main entry point for running specs
"""
from typing import Any, Callable, Dict, List, Optional
from .models import Spec, SpecConf, RunResult
from .spec_engine import SpecEngine, ConfLoader


class SpecRunner:
    """Runs specs and keeps their results for the summary report"""

    def __init__(self, engine: Optional[SpecEngine] = None):
        self.engine = engine or SpecEngine()
        self.results: List[RunResult] = []

    def run(self, spec: Spec, conf: Optional[SpecConf] = None) -> RunResult:
        """Run a spec once"""
        result = self.engine.run(spec, conf)
        self.results.append(result)
        return result

    def run_from_config(self, spec_factory: Callable[..., Spec], config_path: str,
                        **overrides: Any) -> RunResult:
        """
        Build a spec from the 'spec' section of a config file and run it with
        the file's run settings. Keyword overrides replace spec parameters.
        """
        data = ConfLoader.load_from_file(config_path)
        spec_params: Dict[str, Any] = dict(data.get('spec') or {})
        spec_params.update(overrides)
        return self.run(spec_factory(**spec_params), ConfLoader.to_spec_conf(data))

    def report(self) -> str:
        return self.engine.run_logger.generate_report(self.results)
