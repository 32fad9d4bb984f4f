"""Site-framework extensions known to the portfolio configuration.

Extensions are capabilities provided by the site framework and enabled by
name: this module only records which ones exist and keeps the activation
list in order. The features themselves live in the framework.

Key classes:
- Extension: Name and short description of a framework capability.
- ExtensionRegistry: Ordered, duplicate-free activation list.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .errors import ConfigError


@dataclass(frozen=True)
class Extension:
    """A framework capability that can be activated by name.

    Attributes:
        name: Activation name.
        description: What the framework does when it is active.
    """

    name: str
    description: str


KNOWN_EXTENSIONS: dict[str, Extension] = {
    ext.name: ext
    for ext in (
        Extension("autoprefixer", "Add vendor prefixes to compiled stylesheets"),
        Extension("directory_indexes", "Serve pages as directory/index.html"),
        Extension("livereload", "Reload the browser when sources change"),
        Extension("sprockets", "Bundle and fingerprint JavaScript and CSS assets"),
        Extension("minify_css", "Minify stylesheet output"),
    )
}

# Activated in every environment, in this order.
BASE_EXTENSIONS = ("autoprefixer", "directory_indexes", "livereload", "sprockets")


class ExtensionRegistry:
    """Ordered activation list of framework extensions.

    Names are validated against KNOWN_EXTENSIONS. Activating an extension
    twice keeps its first position.
    """

    def __init__(self, names: Iterable[str] = ()):
        self._active: list[str] = []
        for name in names:
            self.activate(name)

    def activate(self, name: str) -> None:
        """Activate an extension by name.

        Args:
            name: Extension name.

        Raises:
            ConfigError: If the extension is not known.
        """
        if not isinstance(name, str):
            raise ConfigError(f"Extension names must be strings, got {name!r}")
        if name not in KNOWN_EXTENSIONS:
            raise ConfigError(f"Unknown extension '{name}'")
        if name not in self._active:
            self._active.append(name)

    def is_active(self, name: str) -> bool:
        return name in self._active

    def names(self) -> tuple[str, ...]:
        return tuple(self._active)

    def __iter__(self) -> Iterator[Extension]:
        return (KNOWN_EXTENSIONS[name] for name in self._active)

    def __len__(self) -> int:
        return len(self._active)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"ExtensionRegistry({', '.join(self._active)})"
