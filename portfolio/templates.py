"""Template rendering for the portfolio site.

This module adapts the SiteConfig to a Jinja2 environment: the configured
output format selects autoescaping, the pretty flag controls whitespace,
helpers become template globals, and streaming switches rendering to
chunked generation.

Key class:
- TemplateEngine: Renders page templates with the configured options.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from .config import SiteConfig
from .pages import Page

# File extensions autoescaped for each output format.
FORMAT_EXTENSIONS = {
    "html": ("html", "htm", "jinja"),
    "xhtml": ("xhtml", "html", "jinja"),
    "xml": ("xml", "jinja"),
}


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        templates_dir: Directory containing templates.
        config: Site configuration.
        env: Jinja2 environment.
    """

    def __init__(self, templates_dir: Path, config: SiteConfig):
        """Initialize the template engine.

        Args:
            templates_dir: Directory with templates, layouts and partials.
            config: Assembled site configuration.
        """
        self.templates_dir = templates_dir
        self.config = config
        options = config.template
        self.env = Environment(
            loader=FileSystemLoader(
                [
                    templates_dir / "_layouts",
                    templates_dir / "_partials",
                    templates_dir,
                ]
            ),
            autoescape=select_autoescape(
                FORMAT_EXTENSIONS[options.format], default_for_string=True
            ),
            trim_blocks=not options.pretty,
            lstrip_blocks=not options.pretty,
        )
        self.env.globals.update(config.helpers)
        self.env.globals["config"] = config

    def _context(self, page: Page | None) -> dict[str, Any]:
        return {
            "current_page": page,
            "data": page.data if page is not None else {},
        }

    def stream_page(self, name: str, page: Page | None = None) -> Iterator[str]:
        """Render a template as a stream of chunks.

        Args:
            name: Template name relative to the templates directory.
            page: Page being rendered.

        Returns:
            Iterator over rendered chunks.
        """
        template = self.env.get_template(name)
        return template.generate(**self._context(page))

    def render_page(self, name: str, page: Page | None = None) -> str:
        """Render a template for a page.

        Args:
            name: Template name relative to the templates directory.
            page: Page being rendered.

        Returns:
            Rendered HTML string.
        """
        if self.config.template.streaming:
            return "".join(self.stream_page(name, page))
        template = self.env.get_template(name)
        return template.render(**self._context(page))

    def render_string(self, source: str, page: Page | None = None) -> str:
        """Render a template string for a page.

        Args:
            source: Template source.
            page: Page being rendered.

        Returns:
            Rendered string.
        """
        template: Template = self.env.from_string(source)
        return template.render(**self._context(page))
