"""Build configuration for Tosainu's portfolio site.

This package declares how the portfolio is built: which site-framework
extensions are active, how page templates are compiled, the helpers that
templates can call, and what changes between development and production
builds.

The configuration is assembled once into an immutable SiteConfig (see
config.py) and passed to whatever consumes it. The CLI module exposes
commands for inspecting the resolved configuration and rendering pages.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
