"""tabular-dq command line.

    tabular-dq check orders.csv orders_checks.yaml
    tabular-dq --errors-only check orders.csv orders_checks.yaml --reporter-config reporter.yaml

Structured-log lines go to the reporter's channel; with the default reporter
config that channel propagates to the colored console handler installed here.
"""

import argparse
import logging
from pathlib import Path
from typing import Optional

import colorlog
import pandas as pd

from tabular_dq import __version__
from tabular_dq.config import ReporterConfig, load_check, load_reporter_config
from tabular_dq.core.runner import run_checks
from tabular_dq.reporters.log_reporter import LogReporter

LOG_FORMAT = "%(asctime)s:%(levelname)s:%(name)s: %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def console_level(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> int:
    if errors_only:
        return logging.ERROR
    if warnings_only:
        return logging.WARNING
    return logging.DEBUG if verbose else logging.INFO


def setup_logging(level: int = logging.INFO) -> None:
    """Replace the root handlers with one colored stderr handler at ``level``."""
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    stream_handler = colorlog.StreamHandler()
    stream_handler.setFormatter(
        colorlog.ColoredFormatter(f"%(log_color)s{LOG_FORMAT}", log_colors=LOG_COLORS)
    )
    root.addHandler(stream_handler)
    root.setLevel(level)


def cmd_check(args: argparse.Namespace) -> int:
    """Run the constraints of a YAML check file against a CSV dataset.

    Returns:
        0 if every constraint succeeded
        1 if any constraint failed
        2 if an input is missing or invalid, or the check could not run
    """
    data_path = Path(args.data)
    if not data_path.exists():
        logging.error("Dataset not found: %s", data_path)
        return 2

    try:
        data_frame = pd.read_csv(data_path)
        check = load_check(Path(args.check_file), data_frame, display_name=data_path.stem)
        if args.reporter_config:
            reporter_config = load_reporter_config(Path(args.reporter_config))
        else:
            reporter_config = ReporterConfig.default()
    except (FileNotFoundError, ValueError) as e:
        logging.error("%s", e)
        return 2

    try:
        results = run_checks([check], [LogReporter.from_config(reporter_config)])
    except (KeyError, NameError) as e:
        # missing columns and unknown names in expressions
        logging.error("Check could not run on %s: %s", data_path, e)
        return 2

    check_result = results[check]
    total = len(check_result.constraint_results)
    failed = check_result.failed_results()
    if failed:
        logging.warning("%d of %d constraints failed on %s", len(failed), total, data_path)
        return 1
    logging.info("All %d constraints passed on %s", total, data_path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tabular-dq",
        description=f"Data-quality checks for tabular data (v{__version__})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_check = sub.add_parser("check", help="Run a YAML check file against a CSV dataset")
    p_check.add_argument("data", help="CSV file to check")
    p_check.add_argument("check_file", help="YAML file listing the constraints")
    p_check.add_argument(
        "--reporter-config",
        default=None,
        help="YAML file with the reporter's logger and level (default: INFO to tabular_dq)",
    )
    p_check.set_defaults(func=cmd_check)

    return p


def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(console_level(args.verbose, args.warnings_only, args.errors_only))
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
