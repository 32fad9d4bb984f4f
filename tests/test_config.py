import dataclasses

import pytest

from portfolio.config import (
    OptionOverrides,
    SiteConfig,
    TemplateOptions,
    assemble_config,
    load_config,
    resolve_overrides,
)
from portfolio.environments import BuildEnvironment, resolve_environment
from portfolio.errors import ConfigError
from portfolio.extensions import BASE_EXTENSIONS, ExtensionRegistry


def test_resolve_overrides_per_environment():
    dev = resolve_overrides(BuildEnvironment.DEVELOPMENT)
    assert dict(dev.settings) == {"debug_assets": True}
    assert dev.extensions == ()

    build = resolve_overrides(BuildEnvironment.BUILD)
    assert dict(build.settings) == {}
    assert build.extensions == ("minify_css",)
    assert isinstance(build, OptionOverrides)


def test_development_config_enables_debug_assets():
    config = assemble_config("development")
    assert config.environment is BuildEnvironment.DEVELOPMENT
    assert config.debug_assets is True
    assert config.extensions == BASE_EXTENSIONS
    assert not config.is_active("minify_css")


def test_build_config_enables_css_minification():
    config = assemble_config(BuildEnvironment.BUILD)
    assert config.debug_assets is False
    assert config.extensions == BASE_EXTENSIONS + ("minify_css",)
    assert config.is_active("minify_css")


def test_default_template_options():
    options = assemble_config().template
    assert options.as_dict() == {
        "format": "html",
        "pretty": False,
        "sort_attrs": False,
        "streaming": False,
        "tabsize": 2,
    }


def test_template_options_validation():
    assert TemplateOptions().merged({"tabsize": 4}).tabsize == 4
    with pytest.raises(ConfigError):
        TemplateOptions(format="haml")
    with pytest.raises(ConfigError):
        TemplateOptions(pretty="yes")
    with pytest.raises(ConfigError):
        TemplateOptions(tabsize=0)
    with pytest.raises(ConfigError):
        TemplateOptions(tabsize=True)
    with pytest.raises(ConfigError) as exc_info:
        TemplateOptions().merged({"indent": 2})
    assert "indent" in exc_info.value.message


def test_site_config_is_immutable():
    config = assemble_config()
    assert isinstance(config, SiteConfig)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.environment = BuildEnvironment.BUILD
    with pytest.raises(TypeError):
        config.settings["debug_assets"] = False
    with pytest.raises(TypeError):
        config.helpers["other"] = print


def test_assemble_config_extra_extensions_keep_order():
    config = assemble_config("build", extensions=["minify_css", "livereload"])
    assert config.extensions == BASE_EXTENSIONS + ("minify_css",)
    with pytest.raises(ConfigError):
        assemble_config(extensions=["asset_hash_v2"])


def test_as_dict_is_plain():
    data = assemble_config("development").as_dict()
    assert data["environment"] == "development"
    assert data["settings"] == {"debug_assets": True}
    assert data["helpers"] == ["page_title"]
    assert data["extensions"] == list(BASE_EXTENSIONS)


def test_resolve_environment_sources(monkeypatch):
    assert resolve_environment() is BuildEnvironment.DEVELOPMENT
    assert resolve_environment(" Production ") is BuildEnvironment.BUILD
    assert resolve_environment("", default="build") is BuildEnvironment.BUILD
    monkeypatch.setenv("PORTFOLIO_ENV", "build")
    assert resolve_environment() is BuildEnvironment.BUILD
    assert resolve_environment("development") is BuildEnvironment.DEVELOPMENT
    assert resolve_environment(None, default="development") is BuildEnvironment.BUILD
    with pytest.raises(ConfigError) as exc_info:
        resolve_environment("staging")
    assert "staging" in exc_info.value.message
    assert exc_info.value.source_path is None


def test_extension_registry():
    registry = ExtensionRegistry(["livereload", "sprockets", "livereload"])
    assert registry.names() == ("livereload", "sprockets")
    assert len(registry) == 2
    assert registry.is_active("sprockets")
    assert [ext.name for ext in registry] == ["livereload", "sprockets"]
    with pytest.raises(ConfigError):
        registry.activate("compass")
    with pytest.raises(ConfigError):
        registry.activate(["livereload"])


def test_load_config_without_file(tmp_path):
    config = load_config(tmp_path)
    assert config.environment is BuildEnvironment.DEVELOPMENT
    assert config.debug_assets


def test_load_config_reads_yaml(tmp_path, monkeypatch):
    (tmp_path / "portfolio.yaml").write_text(
        "environment: build\ntemplate:\n  pretty: true\n  tabsize: 4\n",
        encoding="utf-8",
    )
    config = load_config(tmp_path)
    assert config.environment is BuildEnvironment.BUILD
    assert config.template.pretty is True
    assert config.template.tabsize == 4
    assert config.template.format == "html"

    assert load_config(tmp_path, "development").environment is BuildEnvironment.DEVELOPMENT
    monkeypatch.setenv("PORTFOLIO_ENV", "development")
    assert load_config(tmp_path).environment is BuildEnvironment.DEVELOPMENT


def test_load_config_empty_file(tmp_path):
    (tmp_path / "portfolio.yaml").write_text("", encoding="utf-8")
    assert load_config(tmp_path).template == TemplateOptions()


@pytest.mark.parametrize(
    "content",
    [
        "- not\n- a mapping\n",
        "output_dir: build\n",
        "template: html\n",
        "template:\n  format: haml\n",
        "extensions: livereload\n",
        "extensions:\n  - compass\n",
        "environment: staging\n",
        "template: [unclosed\n",
        "extensions:\n  - [livereload]\n",
        "extensions:\n  - {name: livereload}\n",
    ],
)
def test_load_config_errors_point_at_file(tmp_path, content):
    config_path = tmp_path / "portfolio.yaml"
    config_path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError) as exc_info:
        load_config(tmp_path)
    assert exc_info.value.source_path == config_path
    assert str(config_path) in str(exc_info.value)


def test_load_config_bad_env_var_has_no_file_context(tmp_path, monkeypatch):
    (tmp_path / "portfolio.yaml").write_text("environment: build\n", encoding="utf-8")
    monkeypatch.setenv("PORTFOLIO_ENV", "staging")
    with pytest.raises(ConfigError) as exc_info:
        load_config(tmp_path)
    assert exc_info.value.source_path is None
