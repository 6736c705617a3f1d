import logging
from pathlib import Path

import pytest

from site_prebuild import cli
from site_prebuild.config import DEFAULT_CACHE_DIR, DEFAULT_SITE_DIR


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def _run(argv):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)
    return excinfo.value.code


def test_main_success_exit_code_and_output(make_site, site_dir, cache_dir, capsys):
    make_site({"notes.txt": "hello", "app.js": "var a = 1 ;\n"})
    code = _run(["--site", str(site_dir), "--out", str(cache_dir), "--quiet"])

    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert out[0].startswith("Site: ")
    assert out[1].startswith("Out:  ")
    assert "COPY  → notes.txt" in out
    assert "JS    → app.js" in out
    assert out[-1] == "Build complete."
    assert (cache_dir / "notes.txt").read_text() == "hello"


def test_main_failure_exits_non_zero(make_site, site_dir, cache_dir, capsys):
    make_site({"style.css": "a { color: red; } .oops"})
    code = _run(["--site", str(site_dir), "--out", str(cache_dir)])

    captured = capsys.readouterr()
    assert code == 1
    assert "Build complete." not in captured.out
    assert "CSS error in style.css" in captured.err


def test_main_missing_site_directory(tmp_path, capsys):
    code = _run(["--site", str(tmp_path / "nope"), "--out", str(tmp_path / "cache")])
    assert code == 1
    assert "Site directory does not exist" in capsys.readouterr().err


def test_defaults_without_arguments(monkeypatch):
    monkeypatch.delenv(cli.SITE_ENV_VAR, raising=False)
    monkeypatch.delenv(cli.CACHE_ENV_VAR, raising=False)
    config = cli.build_config(cli.parse_args([]))
    assert config.site_dir == DEFAULT_SITE_DIR
    assert config.cache_dir == DEFAULT_CACHE_DIR
    assert config.batch_size == 50
    assert config.image_quality == 80


def test_environment_overrides(monkeypatch, site_dir, tmp_path):
    monkeypatch.setenv(cli.SITE_ENV_VAR, str(site_dir))
    monkeypatch.setenv(cli.CACHE_ENV_VAR, str(tmp_path / "elsewhere"))
    config = cli.build_config(cli.parse_args([]))
    assert config.site_dir == site_dir
    assert config.cache_dir == tmp_path / "elsewhere"


def test_missing_environment_site_falls_back(monkeypatch, tmp_path):
    monkeypatch.setenv(cli.SITE_ENV_VAR, str(tmp_path / "missing"))
    config = cli.build_config(cli.parse_args([]))
    assert config.site_dir == DEFAULT_SITE_DIR


def test_flags_take_precedence(monkeypatch, tmp_path):
    monkeypatch.setenv(cli.SITE_ENV_VAR, str(tmp_path))
    args = cli.parse_args(["--site", "src", "--out", "dist", "--batch-size", "5", "--quality", "60"])
    config = cli.build_config(args)
    assert config.site_dir == Path("src")
    assert config.cache_dir == Path("dist")
    assert config.batch_size == 5
    assert config.image_quality == 60


def test_verbose_and_quiet_are_exclusive():
    with pytest.raises(SystemExit):
        cli.parse_args(["--verbose", "--quiet"])


def test_main_exits_non_zero_when_cache_cannot_be_created(
    make_site, site_dir, cache_dir, monkeypatch, capsys
):
    make_site({"notes.txt": "hello"})
    target = cache_dir.resolve()
    original_mkdir = Path.mkdir

    def mkdir(self, *args, **kwargs):
        if self == target:
            raise PermissionError(f"cannot create {self}")
        return original_mkdir(self, *args, **kwargs)

    monkeypatch.setattr(Path, "mkdir", mkdir)
    code = _run(["--site", str(site_dir), "--out", str(cache_dir)])

    captured = capsys.readouterr()
    assert code == 1
    assert "cannot create" in captured.err
    assert "Build complete." not in captured.out
