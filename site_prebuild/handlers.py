"""Per-extension asset handlers.

Every handler is synchronous and self-contained: it reads one source file,
writes one output file under the cache directory and returns a
:class:`FileResult`. The builder runs them off the event loop.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable

from PIL import UnidentifiedImageError

from .config import BuildConfig
from .images import transcode_to_webp, webp_relative_path
from .minify import CSSSyntaxError, JSSyntaxError, minify_css, minify_html, minify_js
from .models import AssetBuildError, FileResult
from .templates import TemplateRenderer
from .utils import ensure_parent, relative_to_site

Handler = Callable[[Path], FileResult]

HTML_EXT = ".html"
JS_EXT = ".js"
CSS_EXT = ".css"


def _read_source(source: Path, kind: str, rel: str) -> str:
    try:
        return source.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise AssetBuildError(kind, rel, f"not valid UTF-8 ({exc})") from exc


class AssetHandlers:
    """Route files to handlers and write their output into the cache tree."""

    def __init__(self, config: BuildConfig) -> None:
        self.config = config
        self.renderer = TemplateRenderer(config.site_dir)

    def relative(self, source: Path) -> str:
        return relative_to_site(source, self.config.site_dir)

    def output_path(self, rel: str) -> Path:
        return self.config.cache_dir.joinpath(*rel.split("/"))

    def select(self, source: Path) -> Handler:
        """Pick the handler for ``source`` by its lowercased extension."""
        ext = source.suffix.lower()
        if ext == HTML_EXT:
            return self.build_html
        if ext == JS_EXT:
            return self.build_js
        if ext == CSS_EXT:
            return self.build_css
        if ext in self.config.image_extensions:
            return self.build_image
        return self.copy_asset

    def _write_text(self, tag: str, source: Path, rel: str, text: str) -> FileResult:
        target = self.output_path(rel)
        ensure_parent(target)
        target.write_text(text, encoding="utf-8")
        return self._result(tag, source, rel, target)

    def _copy(self, tag: str, source: Path, rel: str) -> FileResult:
        target = self.output_path(rel)
        ensure_parent(target)
        shutil.copyfile(source, target)
        return self._result(tag, source, rel, target)

    @staticmethod
    def _result(tag: str, source: Path, rel: str, target: Path) -> FileResult:
        return FileResult(
            tag=tag,
            relative_path=rel,
            output_path=target,
            source_bytes=source.stat().st_size,
            output_bytes=target.stat().st_size,
        )

    def build_html(self, source: Path) -> FileResult:
        rel = self.relative(source)
        rendered = self.renderer.render(rel)
        return self._write_text("HTML", source, rel, minify_html(rendered))

    def build_js(self, source: Path) -> FileResult:
        rel = self.relative(source)
        if rel.lower().endswith(".min.js"):
            return self._copy("JS(cp)", source, rel)
        code = _read_source(source, "JS", rel)
        try:
            minified = minify_js(code)
        except JSSyntaxError as exc:
            raise AssetBuildError("JS", rel, str(exc)) from exc
        return self._write_text("JS", source, rel, minified)

    def build_css(self, source: Path) -> FileResult:
        rel = self.relative(source)
        if rel.lower().endswith(".min.css"):
            return self._copy("CSS(cp)", source, rel)
        code = _read_source(source, "CSS", rel)
        try:
            styles = minify_css(code)
        except CSSSyntaxError as exc:
            raise AssetBuildError("CSS", rel, str(exc)) from exc
        return self._write_text("CSS", source, rel, styles)

    def build_image(self, source: Path) -> FileResult:
        source_rel = self.relative(source)
        rel = webp_relative_path(source_rel)
        target = self.output_path(rel)
        ensure_parent(target)
        try:
            transcode_to_webp(source, target, self.config.image_quality)
        except (UnidentifiedImageError, ValueError) as exc:
            raise AssetBuildError("Image", source_rel, str(exc)) from exc
        return self._result("IMG", source, rel, target)

    def copy_asset(self, source: Path) -> FileResult:
        return self._copy("COPY", source, self.relative(source))

