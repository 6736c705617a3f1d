"""Prebuild optimized static assets into a mirrored cache directory."""

from .builder import run_build
from .config import BuildConfig
from .models import AssetBuildError, BuildSummary, FileResult

__all__ = ["AssetBuildError", "BuildConfig", "BuildSummary", "FileResult", "run_build"]
