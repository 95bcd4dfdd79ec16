#!/usr/bin/env python3
"""
Command-line interface for statespec
Runs the bundled example specs and validates run configuration files.
"""
import sys
import argparse
import traceback
import logging
from pathlib import Path
from typing import Any, Dict
from .main import SpecRunner
from .models import SpecConf, RunResult
from .spec_engine import ConfLoader
from .spec_engine.random_source import new_seed
from .specs.realworld import new_realworld_spec, DEFAULT_ENDPOINT
from .specs.valkey_kv import new_valkey_spec


class SpecCLI:
    """Command-line interface for statespec"""

    def __init__(self):
        self.runner = SpecRunner()
        self.config: Dict[str, Any] = {}

    def load_config(self, args) -> bool:
        """Load the --config file if given. Returns False on error."""
        if not getattr(args, 'config', None):
            return True
        try:
            self.config = ConfLoader.load_from_file(args.config)
            print(f"Loaded configuration from {args.config}")
            return True
        except Exception as e:
            print(f"Error: Failed to load config file: {e}")
            print(f"\nConfig file must be YAML (.yaml, .yml) or JSON (.json)")
            print(f"Example: statespec realworld --seed 42 --config conf.yaml")
            return False

    def build_conf(self, args) -> SpecConf:
        """Config file values, overridden by command-line flags"""
        conf = ConfLoader.to_spec_conf(self.config)
        if args.seed is not None:
            conf.seed = args.seed
        if args.iterations is not None:
            conf.iterations = args.iterations
        if args.max_commands is not None:
            conf.max_cmd_per_iter = args.max_commands
        if conf.seed is None:
            conf.seed = new_seed()
        return conf

    def spec_param(self, args, name: str, default: Any) -> Any:
        value = getattr(args, name, None)
        if value is not None:
            return value
        return (self.config.get('spec') or {}).get(name, default)

    def run_realworld(self, args) -> int:
        """Run the Real World API spec"""
        self._print_header("Real World API Spec")
        if not self.load_config(args):
            return 1

        conf = self.build_conf(args)
        endpoint = self.spec_param(args, 'endpoint', DEFAULT_ENDPOINT)
        print(f"realworld api test. running {conf.iterations or 'default'} iterations "
              f"using seed {conf.seed} against endpoint {endpoint}")

        result = self.runner.run(new_realworld_spec(endpoint), conf)
        return self._finish(result, args)

    def run_valkey(self, args) -> int:
        """Run the Valkey key/value spec"""
        self._print_header("Valkey Key/Value Spec")
        if not self.load_config(args):
            return 1

        conf = self.build_conf(args)
        host = self.spec_param(args, 'host', "127.0.0.1")
        port = self.spec_param(args, 'port', 6379)
        print(f"valkey test. running {conf.iterations or 'default'} iterations "
              f"using seed {conf.seed} against {host}:{port}")

        result = self.runner.run(new_valkey_spec(host, port), conf)
        return self._finish(result, args)

    def validate_config(self, args) -> int:
        """Validate a run configuration file"""
        self._print_header(f"Validating config: {args.file}")

        if not Path(args.file).exists():
            print(f"Error: Config file not found: {args.file}")
            print(f"\nMake sure the file path is correct.")
            print(f"Example: statespec validate examples/conf.yaml")
            return 1

        try:
            data = ConfLoader.load_from_file(args.file)
            conf = ConfLoader.to_spec_conf(data)
        except Exception as e:
            print(f"\nError: Validation failed: {e}")
            if args.verbose:
                traceback.print_exc()
            return 1

        print(f"Seed: {conf.seed if conf.seed is not None else 'Random'}")
        print(f"Iterations: {conf.iterations or 'default'}")
        print(f"Max commands per iteration: {conf.max_cmd_per_iter or 'default'}")
        if data.get('spec'):
            print(f"Spec parameters: {data['spec']}")
        print("\nConfiguration is valid!")
        return 0

    def _finish(self, result: RunResult, args) -> int:
        self._print_summary_result(result)
        if args.verbose:
            print()
            print(self.runner.report())
        return 0 if result.success else 1

    def _print_header(self, title: str):
        """Print formatted header"""
        print()
        print("=" * 80)
        print(title)
        print("=" * 80)
        print()

    def _print_summary_result(self, result: RunResult):
        """Print summary of a run"""
        print()
        if result.success:
            print(f"spec ok - {result.iterations} iterations")
        else:
            print(f"Status: FAILED after {result.iterations_completed}/{result.iterations} iterations")
            print(f"Error: {result.error}")
        print(f"Commands executed: {result.commands_executed}")
        print(f"Duration: {result.end_time - result.start_time:.2f}s")
        if result.seed is not None:
            print(f"Seed: {result.seed} (use to reproduce)")


def _add_run_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        '-n', '--iterations',
        type=int,
        help='Number of iterations to run (default: 100)'
    )
    parser.add_argument(
        '-s', '--seed',
        type=int,
        help='Seed to use for the RNG (default: chosen from the clock)'
    )
    parser.add_argument(
        '-m', '--max-commands',
        type=int,
        help='Max commands per iteration (default: 20)'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='Path to configuration file (YAML or JSON)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog='statespec',
        description='statespec - stateful generative testing against a live system',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the Real World API spec against a local server
  statespec realworld -n 100

  # Replay a failing run
  statespec realworld --seed 1700000000000000000

  # Run the Valkey spec with a configuration file
  statespec valkey --config examples/conf.yaml

  # Validate a configuration file
  statespec validate examples/conf.yaml
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version='statespec 0.1.0'
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    realworld_parser = subparsers.add_parser(
        'realworld',
        help='Run the Real World API spec'
    )
    _add_run_arguments(realworld_parser)
    realworld_parser.add_argument(
        '-e', '--endpoint',
        type=str,
        help=f'Base url of endpoint to test (default: {DEFAULT_ENDPOINT})'
    )

    valkey_parser = subparsers.add_parser(
        'valkey',
        help='Run the Valkey key/value spec'
    )
    _add_run_arguments(valkey_parser)
    valkey_parser.add_argument(
        '--host',
        type=str,
        help='Valkey host (default: 127.0.0.1)'
    )
    valkey_parser.add_argument(
        '--port',
        type=int,
        help='Valkey port (default: 6379)'
    )

    validate_parser = subparsers.add_parser(
        'validate',
        help='Validate a run configuration file'
    )
    validate_parser.add_argument(
        'file',
        help='Path to configuration file'
    )
    validate_parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    return parser


def main(argv=None):
    """Main entry point for CLI"""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, 'verbose', False) else logging.INFO,
        format='%(levelname)-5s | %(filename)s:%(lineno)-3d | %(message)s',
        handlers=[logging.StreamHandler()]
    )

    if not args.command:
        print("Error: No command specified\n")
        parser.print_help()
        print("\nCommon commands:")
        print("  statespec realworld -n 100            # Run the Real World API spec")
        print("  statespec valkey --seed 42            # Run the Valkey spec with a seed")
        print("  statespec validate <conf.yaml>        # Validate a config file")
        return 1

    cli = SpecCLI()

    try:
        if args.command == 'realworld':
            return cli.run_realworld(args)
        elif args.command == 'valkey':
            return cli.run_valkey(args)
        elif args.command == 'validate':
            return cli.validate_config(args)
    except KeyboardInterrupt:
        print("\n\nstatespec run was interrupted by user")
        return 130
    except Exception as e:
        print(f"\nUnexpected error: {e}")
        if getattr(args, 'verbose', False):
            traceback.print_exc()
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
