"""Template rendering for HTML pages in the site tree."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError

from .models import AssetBuildError


class TemplateRenderer:
    """Render site pages as Jinja2 templates rooted at the site directory."""

    def __init__(self, site_dir: Path) -> None:
        self.site_dir = site_dir
        self.env = Environment(
            loader=FileSystemLoader(str(site_dir)),
            autoescape=True,
        )

    def render(self, relative_path: str) -> str:
        """Render the page at ``relative_path`` (``/``-separated) to markup."""
        try:
            template = self.env.get_template(relative_path)
            return template.render()
        except (TemplateError, UnicodeDecodeError) as exc:
            raise AssetBuildError("Template", relative_path, str(exc)) from exc
