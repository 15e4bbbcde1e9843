"""CLI entrypoint for the per-country geodata splitter."""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path

from city_coords.common.config_loader import load_config
from city_coords.common.constants import EXIT_HARD_FAIL, EXIT_SUCCESS
from city_coords.common.errors import PipelineError
from city_coords.common.logging import build_logger, log_event
from city_coords.pipeline.runner import run_pipeline


def generate_run_id() -> str:
    now = datetime.now(tz=timezone.utc)
    return now.strftime("run-%Y%m%dT%H%M%S%fZ")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", default=None)
    parser.add_argument("--overlay-config", default=None)
    parser.add_argument("--base-dir", default=".")
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    return parser.parse_args(argv)


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    base_dir = Path(args.base_dir)
    config = load_config(
        Path(args.config) if args.config else None,
        base_dir=base_dir,
        overlay_path=Path(args.overlay_config) if args.overlay_config else None,
    )

    logger = build_logger(run_id, log_dir=config.log_dir, level=args.log_level)
    log_event(logger, "City Coordinates Lookup - Data Processor", run_id=run_id, event="RUN_START", status="ok")
    log_event(logger, "=" * 50, run_id=run_id)

    try:
        run_pipeline(config, logger, run_id)
    except PipelineError as exc:
        logger.error(
            str(exc),
            extra={"run_id": run_id, "event": "RUN_FAIL", "status": "error", "error_code": exc.error_code},
        )
        return EXIT_HARD_FAIL

    log_event(logger, "Processing complete!", run_id=run_id, event="RUN_END", status="ok")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except PipelineError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_HARD_FAIL
    except Exception as exc:
        print(f"ERROR: unexpected failure: {exc}", file=sys.stderr)
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
