"""
Main entry point for running headless Glitchword simulations.

Usage:
    python -m src.main config.yaml
    python -m src.main config.yaml --output results/run1.json --verbose
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

import yaml

from .session import Simulation, SimulationConfig


def load_config(config_path: str) -> SimulationConfig:
    """Load simulation configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return SimulationConfig(**data)


def main():
    parser = argparse.ArgumentParser(
        description="Run a headless Glitchword simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  levels: [1, 6, 11]
  palette: average
  seed: 42
  tick_ms: 100
  bot:
    accuracy: 0.85
    reaction_ms: 600
        """
    )
    parser.add_argument(
        "config",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save results JSON (default: results/simulation_<timestamp>.json)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress to stdout"
    )

    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    # Determine output path
    if args.output:
        output_path = Path(args.output)
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = Path("results") / f"simulation_{timestamp}.json"

    sim = Simulation.create(config=config)

    if args.verbose:
        print(f"Config: {args.config}")
        print(f"Output: {output_path}")
        print()

    try:
        result = sim.run(verbose=args.verbose)
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        result = sim.get_result()
    except Exception as e:
        print(f"Error during simulation: {e}", file=sys.stderr)
        result = sim.get_result()

    # Save results
    sim.save_result(output_path)

    if args.verbose:
        print()
        print(f"Results saved to: {output_path}")

    # Print summary
    print()
    print("=== Simulation Summary ===")
    print(f"Levels played: {len(result.sessions)}")
    print(f"Levels completed: {result.levels_completed}")
    print(f"Total score: {result.total_score}")
    print(f"Duration: {result.duration_seconds:.2f}s")

    return 0


if __name__ == "__main__":
    sys.exit(main())
