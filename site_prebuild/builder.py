"""High-level orchestration for prebuilding the site into the cache tree."""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path
from typing import Callable

from .batching import TaskWindow
from .config import BuildConfig
from .handlers import AssetHandlers, Handler
from .models import BuildSummary, FileResult
from .utils import clear_directory, walk_files

logger = logging.getLogger("site_prebuild")

Reporter = Callable[[str], None]


def write_line(message: str) -> None:
    sys.stdout.write(f"{message}\n")
    sys.stdout.flush()


def format_progress(result: FileResult) -> str:
    return f"{result.tag:<5} → {result.relative_path}"


async def _run_handler(handler: Handler, source: Path, report: Reporter) -> FileResult:
    result = await asyncio.to_thread(handler, source)
    report(format_progress(result))
    return result


async def run_build(config: BuildConfig, report: Reporter = write_line) -> BuildSummary:
    """Wipe the cache directory and rebuild it from the site directory.

    Files are dispatched in traversal order and awaited in groups of
    ``config.batch_size``. The first handler failure aborts the run; output
    written by earlier groups is left in place.
    """
    config = replace(
        config,
        site_dir=config.site_dir.resolve(),
        cache_dir=config.cache_dir.resolve(),
    )
    config.validate()

    report(f"Site: {config.site_dir}")
    report(f"Out:  {config.cache_dir}")
    start = time.perf_counter()

    clear_directory(config.cache_dir)

    handlers = AssetHandlers(config)
    window: TaskWindow[FileResult] = TaskWindow(config.batch_size)
    summary = BuildSummary()
    for source in walk_files(config.site_dir):
        handler = handlers.select(source)
        logger.debug("Dispatching %s to %s", source, handler.__name__)
        summary.results.extend(await window.submit(_run_handler(handler, source, report)))
    summary.results.extend(await window.drain())

    summary.elapsed_seconds = time.perf_counter() - start
    report("Build complete.")
    return summary
