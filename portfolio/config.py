"""Site configuration assembly for the portfolio.

This module turns the portfolio's declarations into one immutable
SiteConfig: the activated extensions, the templating-engine options, the
template helpers, and the settings that depend on the build environment.

Key functions:
- resolve_overrides: Environment-specific settings and extensions.
- assemble_config: Build the SiteConfig for an environment.
- load_config: Read portfolio.yaml and assemble the SiteConfig.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from .environments import ENV_VAR, BuildEnvironment, resolve_environment
from .errors import ConfigError
from .extensions import BASE_EXTENSIONS, ExtensionRegistry
from .helpers import HELPERS

CONFIG_FILENAME = "portfolio.yaml"

TEMPLATE_FORMATS = ("html", "xhtml", "xml")

_CONFIG_KEYS = {"environment", "template", "extensions"}


def _frozen(mapping: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class TemplateOptions:
    """Options controlling how page templates are compiled to HTML.

    Attributes:
        format: Output markup flavour ("html", "xhtml" or "xml").
        pretty: Whether to keep indentation whitespace in the output.
        sort_attrs: Whether attributes are emitted in sorted order.
        streaming: Whether pages are rendered as a stream of chunks.
        tabsize: Indentation width.
    """

    format: str = "html"
    pretty: bool = False
    sort_attrs: bool = False
    streaming: bool = False
    tabsize: int = 2

    def __post_init__(self):
        if self.format not in TEMPLATE_FORMATS:
            raise ConfigError(
                f"Invalid template format '{self.format}' "
                f"(expected one of: {', '.join(TEMPLATE_FORMATS)})"
            )
        for name in ("pretty", "sort_attrs", "streaming"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"Template option '{name}' must be true or false")
        if (
            isinstance(self.tabsize, bool)
            or not isinstance(self.tabsize, int)
            or self.tabsize < 1
        ):
            raise ConfigError("Template option 'tabsize' must be a positive integer")

    def merged(self, values: Mapping[str, Any]) -> TemplateOptions:
        """Return a copy with some options replaced.

        Args:
            values: Option names to new values.

        Returns:
            New TemplateOptions.

        Raises:
            ConfigError: If an option name is unknown or a value is invalid.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigError(f"Unknown template option(s): {', '.join(unknown)}")
        return replace(self, **values)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class OptionOverrides:
    """Settings and extensions contributed by a build environment."""

    settings: Mapping[str, Any] = field(default_factory=_frozen)
    extensions: tuple[str, ...] = ()


@dataclass(frozen=True)
class SiteConfig:
    """Immutable configuration consumed by the site framework.

    Attributes:
        environment: Active build environment.
        extensions: Activated extension names, in activation order.
        template: Templating-engine options.
        settings: Additional framework settings (e.g. debug_assets).
        helpers: Template helper name to callable.
    """

    environment: BuildEnvironment
    extensions: tuple[str, ...]
    template: TemplateOptions
    settings: Mapping[str, Any] = field(default_factory=_frozen)
    helpers: Mapping[str, Callable[..., Any]] = field(default_factory=_frozen)

    @property
    def debug_assets(self) -> bool:
        """Whether asset references bypass fingerprinting and caching."""
        return bool(self.settings.get("debug_assets", False))

    def is_active(self, extension: str) -> bool:
        return extension in self.extensions

    def as_dict(self) -> dict[str, Any]:
        """Return a plain, serializable view of the configuration."""
        return {
            "environment": self.environment.value,
            "extensions": list(self.extensions),
            "template": self.template.as_dict(),
            "settings": dict(self.settings),
            "helpers": sorted(self.helpers),
        }


def resolve_overrides(environment: BuildEnvironment) -> OptionOverrides:
    """Return the configuration overrides for a build environment.

    Development serves assets in debug mode so edits show up without a
    rebuild; production builds minify stylesheets.

    Args:
        environment: Active build environment.

    Returns:
        OptionOverrides for the environment.
    """
    if environment is BuildEnvironment.DEVELOPMENT:
        return OptionOverrides(settings=_frozen({"debug_assets": True}))
    return OptionOverrides(extensions=("minify_css",))


def assemble_config(
    environment: BuildEnvironment | str | None = None,
    template: Mapping[str, Any] | None = None,
    extensions: Iterable[str] = (),
) -> SiteConfig:
    """Assemble the site configuration for a build environment.

    Args:
        environment: Build environment or its name; resolved with
            resolve_environment when not a BuildEnvironment.
        template: Template options to merge over the defaults.
        extensions: Extra extensions activated after the base list.

    Returns:
        The immutable SiteConfig.

    Raises:
        ConfigError: On unknown environments, extensions or template options.
    """
    env = resolve_environment(environment)
    overrides = resolve_overrides(env)

    registry = ExtensionRegistry(BASE_EXTENSIONS)
    for name in extensions:
        registry.activate(name)
    for name in overrides.extensions:
        registry.activate(name)

    options = TemplateOptions().merged(template or {})
    return SiteConfig(
        environment=env,
        extensions=registry.names(),
        template=options,
        settings=_frozen(overrides.settings),
        helpers=_frozen(HELPERS),
    )


def load_config(
    project_root: Path, environment: BuildEnvironment | str | None = None
) -> SiteConfig:
    """Load portfolio.yaml from the project root and assemble the configuration.

    The file is optional. Recognized keys are ``environment`` (used when
    neither the argument nor PORTFOLIO_ENV is set), ``template`` and
    ``extensions``.

    Args:
        project_root: Root directory of the project.
        environment: Explicit build environment, overriding everything else.

    Returns:
        The immutable SiteConfig.

    Raises:
        ConfigError: If the file is malformed or holds invalid values.
    """
    config_path = project_root / CONFIG_FILENAME
    loaded = _read_config_file(config_path)

    if environment is None and not os.environ.get(ENV_VAR, "").strip():
        try:
            environment = resolve_environment(None, default=loaded.get("environment"))
        except ConfigError as exc:
            raise ConfigError(exc.message, config_path) from exc
    env = resolve_environment(environment)

    try:
        template = loaded.get("template") or {}
        if not isinstance(template, dict):
            raise ConfigError("'template' must be a mapping")
        extra = loaded.get("extensions") or []
        if not isinstance(extra, list) or not all(
            isinstance(name, str) for name in extra
        ):
            raise ConfigError("'extensions' must be a list of names")
        return assemble_config(env, template=template, extensions=extra)
    except ConfigError as exc:
        if exc.source_path is not None or not config_path.exists():
            raise
        raise ConfigError(exc.message, config_path) from exc


def _read_config_file(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        return {}
    with open(config_path, encoding="utf-8") as f:
        try:
            loaded = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML: {exc}", config_path) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError("Expected a mapping at the top level", config_path)
    unknown = sorted(set(loaded) - _CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Unknown key(s): {', '.join(unknown)}", config_path)
    return loaded
