"""Unit tests for config.py"""

import pytest

from mdsite.config import load_config


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run each test from an empty directory with no MDSITE_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in ("SITE_TITLE", "OUTPUT_DIR", "STYLESHEET", "INLINE_STYLES", "INCLUDE_DRAFTS", "JOBS"):
        monkeypatch.delenv(f"MDSITE_{name}", raising=False)


def test_load_config_defaults():
    """Settings defaults are used when no config.yaml, env var, or CLI override exists."""
    settings = load_config()
    assert settings.output_dir == "site"
    assert settings.stylesheet is None
    assert settings.stylesheet_name == "style.css"
    assert settings.jobs == 1
    assert settings.include_drafts is False


def test_load_config_reads_config_yaml(tmp_path):
    """Values in config.yaml replace the defaults."""
    (tmp_path / "config.yaml").write_text("site_title: Traits\noutput_dir: public\n")
    settings = load_config()
    assert settings.site_title == "Traits"
    assert settings.output_dir == "public"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """MDSITE_OUTPUT_DIR takes precedence over config.yaml output_dir."""
    (tmp_path / "config.yaml").write_text("output_dir: public\n")
    monkeypatch.setenv("MDSITE_OUTPUT_DIR", "from-env")
    assert load_config().output_dir == "from-env"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("MDSITE_JOBS", "3")
    assert load_config(overrides={"jobs": 2}).jobs == 2
    assert load_config(overrides={"jobs": None}).jobs == 3


def test_load_config_env_bool(monkeypatch):
    """MDSITE_INCLUDE_DRAFTS is coerced to bool."""
    monkeypatch.setenv("MDSITE_INCLUDE_DRAFTS", "true")
    assert load_config().include_drafts is True


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_rejects_non_mapping(tmp_path):
    """A config.yaml holding a list is rejected."""
    (tmp_path / "config.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


@pytest.mark.parametrize("overrides", [
    {"jobs": 0},
    {"stylesheet_name": "style.txt"},
])
def test_load_config_invalid_values(overrides):
    """Out-of-range values surface as ValueError."""
    with pytest.raises(ValueError, match="Invalid settings"):
        load_config(overrides=overrides)
