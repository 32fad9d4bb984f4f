"""Template helpers for the portfolio site.

Helpers are plain functions made available to every page template. The
helper table maps the name templates call to the callable installed in
the template environment.

Key functions:
    page_title: Compute the HTML <title> text for a page.
    page_title_helper: Zero-argument template form reading current_page.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import pass_context
from jinja2.runtime import Context

SITE_NAME = "Tosainu's Portfolio"
TITLE_SEPARATOR = " | "


def page_title(page: Any) -> str:
    """Return the text for a page's <title> element.

    The page's own title, when set, is prefixed to the site name. Absent,
    None and empty titles all produce the bare site name. The result is not
    escaped; templates with autoescaping handle that.

    Args:
        page: Page exposing ``data`` (a mapping or attribute object), or None.

    Returns:
        Title string ending with the site name.

    Examples:
        >>> page_title(SimpleNamespace(data={"title": "About"}))
        "About | Tosainu's Portfolio"

        >>> page_title(None)
        "Tosainu's Portfolio"
    """
    title = ""
    value = _title_of(page)
    if value:
        title += f"{value}{TITLE_SEPARATOR}"
    title += SITE_NAME
    return title


def _title_of(page: Any) -> Any:
    data = getattr(page, "data", None)
    if data is None:
        return None
    if isinstance(data, Mapping):
        return data.get("title")
    return getattr(data, "title", None)


@pass_context
def page_title_helper(context: Context) -> str:
    """Compute the title of the page currently being rendered."""
    return page_title(context.get("current_page"))


HELPERS = {
    "page_title": page_title_helper,
}
