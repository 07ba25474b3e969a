"""
pysem/__main__.py

Entry point for the pysem projection CLI.

Examples
--------
    python -m pysem --input project/ --scenario "Net Zero" --output results/
    python -m pysem --dataset dataset.yaml --list-scenarios
"""

import argparse
import os
import sys

from .input.reader import ProjectInputReader
from .interfaces import available_scenarios
from .logs.logger import get_logger
from .output.writer import OutputWriter
from .run import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pysem",
        description="Multi-sector energy system projection CLI"
    )
    parser.add_argument("--input", type=str, default=".", help="Path to project folder (config.yaml, dataset).")
    parser.add_argument("--dataset", type=str, help="Path to dataset document (overrides config).")
    parser.add_argument("--scenario", type=str, help="Scenario name from the dataset's scenario library.")
    parser.add_argument("--params", type=str, help="Path to scenario parameter document (overrides scenario library).")
    parser.add_argument("--output", type=str, help="Path to output directory.")
    parser.add_argument("--unit", choices=["GJ", "EJ"], default="GJ", help="Energy unit of result tables.")
    parser.add_argument("--loglevel", type=str, help="Set logging level.")
    parser.add_argument("--list-scenarios", action="store_true", help="List scenarios in the dataset and exit.")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    reader = ProjectInputReader(args.input)
    reader.read_config()
    config = reader.get_config()

    try:
        dataset = reader.read_dataset(_from_cwd(args.dataset))
    except (FileNotFoundError, ValueError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    if args.list_scenarios:
        for name in available_scenarios(dataset):
            print(name)
        return 0

    try:
        params = reader.read_parameters(dataset, scenario=args.scenario, params_path=_from_cwd(args.params))
    except KeyError as e:
        print(f"[ERROR] {e.args[0]}", file=sys.stderr)
        return 1

    logger = get_logger(
        run_name="pysem",
        scenario=params.name or "default",
        log_dir=config.get("log_dir"),
        level=args.loglevel or config.get("log_level", "INFO"),
    )

    try:
        results = run(dataset, params=params)
    except ValueError as e:
        logger.error(f"Projection failed: {e}")
        return 1

    output_dir = args.output or config.get("output_dir") or "results"
    paths = OutputWriter(output_dir).write_results(results, unit=args.unit)
    logger.info(f"Scenario '{params.name}': {len(results)} years written to {output_dir} ({len(paths)} files)")
    return 0


def _from_cwd(path):
    # Command-line paths are relative to the working directory, not the project folder
    return os.path.abspath(path) if path else None


if __name__ == "__main__":
    sys.exit(main())
