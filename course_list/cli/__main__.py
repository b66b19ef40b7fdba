from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from course_list.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from course_list.errors import CourseListError
from course_list.logging.init import enable_debug, log_summary, setup_logging
from course_list.services.pipeline import generate_course_list, list_sheets
from course_list.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (values may be referenced from config paths as $VARS)
- Load config (default config/course_list.yml)
- Generate the course list, or only list sheet names with --list-sheets
- Print a SUMMARY line on success
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_GENERATION_FAILED = 2


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv.

    Existing environment variables win unless override=True.
    """
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a sorted course participant list from a workbook")
    p.add_argument(
        "--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to YAML config (default: %(default)s)"
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--list-sheets", action="store_true", help="Print sheet names of the source workbook then exit")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストで main([]) を許容)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        enable_debug().debug("debug mode enabled")

    _load_env_file(Path(".env"))
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.list_sheets:
        try:
            names = list_sheets(cfg)
        except CourseListError as e:
            logger.error(f"sheets: {e}")
            return EXIT_GENERATION_FAILED
        for name in names:
            print(name)
        return EXIT_SUCCESS

    logger.info(f"Reading {cfg.source_path} (sheet={cfg.sheet_name}, column={cfg.group_column})")
    try:
        result = generate_course_list(cfg)
    except CourseListError as e:
        logger.error(f"generate: {e}")
        return EXIT_GENERATION_FAILED

    log_summary(render_summary_line(result).removeprefix("SUMMARY "))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
