from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Union

import pytest
from PIL import Image

from site_prebuild.config import BuildConfig

Content = Union[str, bytes]


def write_image(path: Path, fmt: str = "PNG", mode: str = "RGBA") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    color = (200, 120, 40, 255) if mode == "RGBA" else (200, 120, 40)
    Image.new(mode, (16, 12), color).save(path, format=fmt)
    return path


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def make_site(site_dir: Path) -> Callable[[Dict[str, Content]], Path]:
    """Populate the site directory from a mapping of relative path to content."""

    def _make(files: Dict[str, Content]) -> Path:
        for rel, content in files.items():
            target = site_dir / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return site_dir

    return _make


@pytest.fixture
def config(site_dir: Path, cache_dir: Path) -> BuildConfig:
    return BuildConfig(site_dir=site_dir, cache_dir=cache_dir)
