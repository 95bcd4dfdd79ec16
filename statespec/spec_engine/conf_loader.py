"""
Configuration Loader - Run configuration from YAML or JSON files
"""
import json
import yaml
from pathlib import Path
from typing import Any, Dict, Union
from ..models import SpecConf

RUN_KEYS = ('seed', 'iterations', 'max_cmd_per_iter')
KNOWN_KEYS = RUN_KEYS + ('spec',)


class ConfLoader:
    """Utility class for loading and validating run configuration"""

    @staticmethod
    def load_from_file(file_path: Union[str, Path]) -> Dict[str, Any]:
        """Load a configuration mapping from a .yaml, .yml or .json file."""
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(file_path, 'r') as f:
            config_text = f.read()

        if file_path.suffix in ['.yaml', '.yml']:
            return ConfLoader.load_from_string(config_text)
        elif file_path.suffix == '.json':
            try:
                data = json.loads(config_text) or {}
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON syntax in {file_path}: {e}")
            ConfLoader.validate(data)
            return data
        else:
            raise ValueError(f"Unsupported config format: {file_path.suffix}")

    @staticmethod
    def load_from_string(config_text: str) -> Dict[str, Any]:
        """Load a configuration mapping from a YAML string."""
        try:
            data = yaml.safe_load(config_text) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML syntax: {e}")

        ConfLoader.validate(data)
        return data

    @staticmethod
    def validate(data: Any) -> bool:
        """Raise ValueError if the mapping is not a valid run configuration."""
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")

        unknown = sorted(set(data) - set(KNOWN_KEYS))
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

        for key in RUN_KEYS:
            value = data.get(key)
            # bool is an int subclass but never a valid count or seed
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise ValueError(f"'{key}' must be an integer, got {value!r}")

        spec_params = data.get('spec')
        if spec_params is not None and not isinstance(spec_params, dict):
            raise ValueError("'spec' must be a mapping of spec parameters")

        return True

    @staticmethod
    def to_spec_conf(data: Dict[str, Any]) -> SpecConf:
        """Build a SpecConf from a validated configuration mapping."""
        return SpecConf(
            seed=data.get('seed'),
            iterations=data.get('iterations') or 0,
            max_cmd_per_iter=data.get('max_cmd_per_iter') or 0
        )

    @staticmethod
    def save_conf(conf: SpecConf, file_path: Union[str, Path], spec_params: Dict[str, Any] = None) -> None:
        """Write a SpecConf (and optional spec parameters) as YAML."""
        data = {
            'seed': conf.seed,
            'iterations': conf.iterations,
            'max_cmd_per_iter': conf.max_cmd_per_iter
        }
        if spec_params:
            data['spec'] = dict(spec_params)

        with open(file_path, 'w') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
