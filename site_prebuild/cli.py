"""Command-line entry point for the site prebuild."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from .builder import run_build
from .config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_CACHE_DIR,
    DEFAULT_IMAGE_QUALITY,
    DEFAULT_SITE_DIR,
    BuildConfig,
)

logger = logging.getLogger("site_prebuild.cli")

SITE_ENV_VAR = "SITE_PREBUILD_SITE_DIR"
CACHE_ENV_VAR = "SITE_PREBUILD_CACHE_DIR"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Prebuild optimized site assets into a mirrored cache directory.",
    )
    parser.add_argument(
        "--site",
        type=Path,
        default=None,
        help=f"Source site directory (default: ${SITE_ENV_VAR} or {DEFAULT_SITE_DIR})",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help=f"Cache directory to regenerate (default: ${CACHE_ENV_VAR} or {DEFAULT_CACHE_DIR})",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help="Maximum number of files processed concurrently",
    )
    parser.add_argument(
        "--quality",
        type=int,
        default=DEFAULT_IMAGE_QUALITY,
        help="WebP quality used when re-encoding images (0-100)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    verbosity.add_argument(
        "--quiet",
        action="store_true",
        help="Only log errors",
    )
    return parser.parse_args(argv)


def _resolve_site_dir(override: Optional[Path]) -> Path:
    if override is not None:
        return override
    env_value = os.getenv(SITE_ENV_VAR)
    if not env_value:
        return DEFAULT_SITE_DIR
    env_path = Path(env_value).expanduser()
    if env_path.is_dir():
        logger.debug("%s override detected at %s", SITE_ENV_VAR, env_path)
        return env_path
    logger.warning(
        "%s is set to %s but the directory does not exist; falling back to %s",
        SITE_ENV_VAR,
        env_path,
        DEFAULT_SITE_DIR,
    )
    return DEFAULT_SITE_DIR


def _resolve_cache_dir(override: Optional[Path]) -> Path:
    if override is not None:
        return override
    env_value = os.getenv(CACHE_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()
    return DEFAULT_CACHE_DIR


def build_config(args: argparse.Namespace) -> BuildConfig:
    return BuildConfig(
        site_dir=_resolve_site_dir(args.site),
        cache_dir=_resolve_cache_dir(args.out),
        batch_size=args.batch_size,
        image_quality=args.quality,
    )


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = build_config(args)
    try:
        summary = asyncio.run(run_build(config))
    except KeyboardInterrupt:
        logger.error("Build interrupted")
        sys.exit(130)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Build failed")
        sys.exit(1)

    logger.info(
        "Finished in %.2fs (%d files, %d -> %d bytes, %.1f%% smaller)",
        summary.elapsed_seconds,
        summary.file_count,
        summary.source_bytes,
        summary.output_bytes,
        summary.reduction_percent,
    )
    if args.verbose:
        for tag, count in sorted(summary.files_by_tag().items()):
            logger.debug("%-7s %d file(s)", tag, count)
    sys.exit(0)


if __name__ == "__main__":
    main()
