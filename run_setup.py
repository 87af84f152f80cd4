"""CLI entry point for the AKS setup pipeline."""

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.config import ConfigurationError
from src.logging_config import configure_logging
from src.orchestrator import STEP_CATEGORIES, RunStatus, SetupOrchestrator
from src.prerequisites import PrerequisiteUnsatisfied
from src.report import ReportGenerator

DEFAULT_CONFIG_PATH = "config/setup-config.json"
DEFAULT_REPORTS_DIR = "reports"

EXIT_OK = 0
EXIT_STEP_FAILURE = 1
EXIT_SETUP_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the AKS setup pipeline")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Configuration file (default: SETUP_CONFIG_PATH env var or {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--skip",
        action="append",
        choices=STEP_CATEGORIES,
        default=[],
        metavar="CATEGORY",
        help=f"Skip a step category; repeatable. One of: {', '.join(STEP_CATEGORIES)}",
    )
    parser.add_argument(
        "--only",
        action="append",
        choices=STEP_CATEGORIES,
        default=[],
        metavar="CATEGORY",
        help="Run only this step category; repeatable",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would run without invoking any step",
    )
    parser.add_argument(
        "--reports-dir",
        type=Path,
        default=None,
        help=f"Directory for report files (default: SETUP_REPORTS_DIR env var or {DEFAULT_REPORTS_DIR})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (overrides LOG_LEVEL env var)",
    )
    return parser


def main(argv: list[str] | None = None, orchestrator: SetupOrchestrator | None = None) -> int:
    load_dotenv()

    args = build_parser().parse_args(argv)
    configure_logging(level_override=args.log_level)

    config_path = args.config or Path(os.getenv("SETUP_CONFIG_PATH", DEFAULT_CONFIG_PATH))
    reports_dir = args.reports_dir or Path(os.getenv("SETUP_REPORTS_DIR", DEFAULT_REPORTS_DIR))

    orchestrator = orchestrator or SetupOrchestrator()
    try:
        report = orchestrator.run(
            config_path,
            skip_categories=args.skip,
            only_categories=args.only,
            dry_run=args.dry_run,
        )
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_SETUP_ERROR
    except PrerequisiteUnsatisfied as e:
        print("ERROR: prerequisites not satisfied:", file=sys.stderr)
        for failure in e.failures:
            print(f"  - {failure}", file=sys.stderr)
        return EXIT_SETUP_ERROR
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_SETUP_ERROR

    generator = ReportGenerator()
    print(generator.render(report))
    generator.persist(report, reports_dir)

    if report.overall_status is RunStatus.PARTIAL_FAILURE:
        return EXIT_STEP_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
