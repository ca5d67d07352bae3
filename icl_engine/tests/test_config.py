"""
ICL Engine - Configuration Tests
"""

import pytest

from icl_engine.core import config as config_module
from icl_engine.core.config import ICLConfig, LogLevel, get_config, load_config, set_config
from icl_engine.core.exceptions import ConfigurationException
from icl_engine.protocols.x9.options import (
    DEFAULT_BUFFER_SIZE,
    CharacterEncoding,
    Dialect,
    Framing,
)

ENV_KEYS = (
    "FRB_COMPATIBILITY_MODE",
    "ICL_FRAMING",
    "ICL_ENCODING",
    "ICL_DIALECT",
    "ICL_BUFFER_SIZE",
    "ICL_MAX_PAYLOAD_LENGTH",
    "ICL_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config_module, "_config", None)
    return monkeypatch


class TestICLConfig:
    """Defaults and conversion to ICLOptions."""

    def test_defaults(self):
        options = ICLConfig().to_options()
        assert options.framing is Framing.FIXED
        assert options.encoding is CharacterEncoding.ASCII
        assert options.dialect is Dialect.X9_100_187
        assert options.frb_compatibility_mode is False
        assert options.buffer_size == DEFAULT_BUFFER_SIZE
        assert options.line_terminator == b"\n"

    def test_invalid_values(self):
        config = ICLConfig(framing="streaming", buffer_size=0)
        with pytest.raises(ConfigurationException) as exc_info:
            config.to_options()
        assert "Unknown framing" in exc_info.value.message
        assert "Buffer size" in exc_info.value.message

    def test_to_dict(self):
        data = ICLConfig(encoding="ebcdic").to_dict()
        assert data["encoding"] == "ebcdic"
        assert data["log_level"] == "INFO"


class TestEnvironment:
    """Environment variables, read only by the configuration layer."""

    def test_frb_compatibility_mode(self, clean_env):
        clean_env.setenv("FRB_COMPATIBILITY_MODE", "TRUE")
        assert ICLConfig.load_from_env().to_options().frb_compatibility_mode is True

    def test_frb_compatibility_mode_false(self, clean_env):
        clean_env.setenv("FRB_COMPATIBILITY_MODE", "false")
        assert ICLConfig.load_from_env().frb_compatibility_mode is False

    def test_codec_settings(self, clean_env):
        clean_env.setenv("ICL_FRAMING", "VARIABLE")
        clean_env.setenv("ICL_ENCODING", "ebcdic")
        clean_env.setenv("ICL_DIALECT", "dstu")
        clean_env.setenv("ICL_BUFFER_SIZE", "262144")
        clean_env.setenv("ICL_LOG_LEVEL", "debug")
        config = ICLConfig.load_from_env()
        options = config.to_options()
        assert options.is_variable_length
        assert options.is_ebcdic
        assert options.is_dstu
        assert options.buffer_size == 262144
        assert config.log_level is LogLevel.DEBUG

    def test_invalid_integer(self, clean_env):
        clean_env.setenv("ICL_BUFFER_SIZE", "large")
        with pytest.raises(ConfigurationException) as exc_info:
            ICLConfig.load_from_env()
        assert exc_info.value.context["config_key"] == "ICL_BUFFER_SIZE"

    def test_global_config(self, clean_env):
        clean_env.setenv("ICL_ENCODING", "ebcdic")
        assert get_config().encoding == "ebcdic"
        set_config(ICLConfig(framing="variable"))
        assert get_config().framing == "variable"


class TestConfigFile:
    """YAML configuration files."""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "icl.yaml"
        path.write_text(
            "icl:\n"
            "  framing: variable\n"
            "  encoding: EBCDIC\n"
            "  frb_compatibility_mode: true\n"
            "  buffer_size: 131072\n"
            "  log_level: warning\n"
        )
        config = ICLConfig.load_from_file(path)
        options = config.to_options()
        assert options.is_variable_length
        assert options.is_ebcdic
        assert options.frb_compatibility_mode
        assert options.buffer_size == 131072
        assert config.log_level is LogLevel.WARNING

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationException):
            ICLConfig.load_from_file(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("framing: [fixed\n")
        with pytest.raises(ConfigurationException):
            ICLConfig.load_from_file(path)

    def test_load_config_sets_global(self, clean_env, tmp_path):
        path = tmp_path / "icl.yaml"
        path.write_text("dialect: dstu\n")
        load_config(path)
        assert get_config().to_options().is_dstu

    def test_load_config_rejects_invalid(self, clean_env, tmp_path):
        path = tmp_path / "icl.yaml"
        path.write_text("encoding: utf-16\n")
        with pytest.raises(ConfigurationException):
            load_config(path)
