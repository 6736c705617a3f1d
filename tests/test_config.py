from dataclasses import replace

import pytest

from site_prebuild.config import IMAGE_EXTENSIONS
from site_prebuild.models import BuildSummary, FileResult


def test_default_image_extensions():
    assert IMAGE_EXTENSIONS == {".jpg", ".jpeg", ".png", ".webp", ".jfif"}


def test_valid_config_passes(config):
    config.validate()


@pytest.mark.parametrize("batch_size", [0, -3])
def test_rejects_bad_batch_size(config, batch_size):
    with pytest.raises(ValueError, match="batch_size"):
        replace(config, batch_size=batch_size).validate()


@pytest.mark.parametrize("quality", [-1, 101])
def test_rejects_bad_quality(config, quality):
    with pytest.raises(ValueError, match="image_quality"):
        replace(config, image_quality=quality).validate()


def test_rejects_missing_site(config, tmp_path):
    with pytest.raises(ValueError, match="does not exist"):
        replace(config, site_dir=tmp_path / "missing").validate()


@pytest.mark.parametrize("relation", ["same", "parent"])
def test_rejects_cache_overlapping_site(config, site_dir, relation):
    cache = site_dir if relation == "same" else site_dir.parent
    with pytest.raises(ValueError, match="overlap"):
        replace(config, cache_dir=cache).validate()


def test_summary_totals(tmp_path):
    summary = BuildSummary(
        results=[
            FileResult("CSS", "a.css", tmp_path / "a.css", 200, 50),
            FileResult("COPY", "b.txt", tmp_path / "b.txt", 200, 200),
            FileResult("CSS", "c.css", tmp_path / "c.css", 100, 50),
        ]
    )
    assert summary.file_count == 3
    assert summary.source_bytes == 500
    assert summary.output_bytes == 300
    assert summary.bytes_saved == 200
    assert summary.reduction_percent == pytest.approx(40.0)
    assert summary.files_by_tag() == {"CSS": 2, "COPY": 1}


def test_empty_summary_has_no_reduction():
    assert BuildSummary().reduction_percent == 0.0
