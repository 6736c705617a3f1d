"""Configuration objects and constants for the asset builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet

DEFAULT_SITE_DIR = Path("..") / "BakerySite"
DEFAULT_CACHE_DIR = Path("cache")
DEFAULT_BATCH_SIZE = 50
DEFAULT_IMAGE_QUALITY = 80
IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp", ".jfif"})


@dataclass
class BuildConfig:
    """Top-level settings that control a prebuild run."""

    site_dir: Path
    cache_dir: Path
    batch_size: int = DEFAULT_BATCH_SIZE
    image_quality: int = DEFAULT_IMAGE_QUALITY
    image_extensions: FrozenSet[str] = field(default=IMAGE_EXTENSIONS)

    def validate(self) -> None:
        """Reject settings that would make the run unsafe or meaningless."""
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        if not 0 <= self.image_quality <= 100:
            raise ValueError(
                f"image_quality must be between 0 and 100, got {self.image_quality}"
            )
        if not self.site_dir.is_dir():
            raise ValueError(f"Site directory does not exist: {self.site_dir}")
        site = self.site_dir.resolve()
        cache = self.cache_dir.resolve()
        # The cache is wiped on every run and must not overlap the source tree.
        if cache == site or cache in site.parents or site in cache.parents:
            raise ValueError(
                f"Cache directory {cache} must not overlap the site directory {site}"
            )
