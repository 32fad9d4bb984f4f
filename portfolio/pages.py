"""Page metadata for the portfolio site.

Pages carry a metadata mapping supplied by YAML front matter at the top of
the source file. Helpers and templates read it; nothing here writes it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*(?:\n|$)", re.DOTALL)


@dataclass(frozen=True)
class Page:
    """A page source with its metadata.

    Attributes:
        path: Path to the source file.
        data: Front matter values (e.g. title).
        body: Source content after the front matter.
    """

    path: Path
    data: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    @property
    def title(self) -> str | None:
        return self.data.get("title")


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML front matter from content.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (front matter dict, remaining content). Missing, malformed
        or non-mapping front matter yields an empty dict and the full text.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError:
        return {}, text
    if not isinstance(data, dict):
        return {}, text
    return data, text[match.end() :]


def load_page(path: Path) -> Page:
    """Read a page source file.

    Args:
        path: Path to the page source.

    Returns:
        Page with its front matter and body.
    """
    text = path.read_text(encoding="utf-8")
    data, body = extract_frontmatter(text)
    return Page(path=path, data=data, body=body)
