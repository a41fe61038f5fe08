"""Tests for configuration management."""

import tempfile
from pathlib import Path

import pytest
import yaml

from ssgbridge.validation.config import (
    AdapterSettings,
    BridgeConfig,
    Config,
    ConfigError,
    env_var_for,
)


class TestConfig:
    """Tests for Config class."""

    @pytest.fixture
    def temp_config_dir(self):
        """Create a temporary config directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    def test_deep_merge(self):
        """Test deep merging of dictionaries."""
        config = Config()

        base = {
            "a": 1,
            "b": {"c": 2, "d": 3},
            "e": [1, 2, 3],
        }

        override = {
            "b": {"c": 10, "f": 5},
            "g": "new",
        }

        result = config._deep_merge(base, override)

        assert result["a"] == 1
        assert result["b"]["c"] == 10
        assert result["b"]["d"] == 3
        assert result["b"]["f"] == 5
        assert result["e"] == [1, 2, 3]
        assert result["g"] == "new"

    def test_get_merged_config(self):
        """Test getting merged configuration."""
        global_config = {
            "adapters": {
                "zola": {"enabled": True, "binaries": {"zola": "/opt/zola"}},
            },
            "logging": {"level": "INFO"},
        }

        local_config = {
            "adapters": {"zola": {"enabled": False}},
        }

        config = Config(global_config=global_config, local_config=local_config)
        merged = config.get_merged_config()

        # Local should override global
        assert merged["adapters"]["zola"]["enabled"] is False
        # Global should be preserved
        assert merged["adapters"]["zola"]["binaries"] == {"zola": "/opt/zola"}
        assert merged["logging"]["level"] == "INFO"

    def test_is_enabled_defaults_true(self):
        """Adapters not mentioned in the config are enabled."""
        config = Config(global_config={"adapters": {"zola": {"enabled": False}}}, environ={})

        assert config.is_enabled("zola") is False
        assert config.is_enabled("hakyll") is True

    def test_binaries_from_environment(self):
        """SSGBRIDGE_BIN_<PROGRAM> overrides apply to every adapter using the program."""
        config = Config(environ={"SSGBRIDGE_BIN_MIX": "/opt/elixir/bin/mix"})

        assert config.binaries_for("serum", ["mix"]) == {"mix": "/opt/elixir/bin/mix"}
        assert config.binaries_for("tableau", ["mix"]) == {"mix": "/opt/elixir/bin/mix"}
        assert config.binaries_for("zola", ["zola"]) == {}

    def test_config_file_beats_environment(self):
        config = Config(
            global_config={"adapters": {"serum": {"binaries": {"mix": "/custom/mix"}}}},
            environ={"SSGBRIDGE_BIN_MIX": "/opt/elixir/bin/mix"},
        )

        assert config.binaries_for("serum", ["mix"]) == {"mix": "/custom/mix"}
        assert config.binaries_for("tableau", ["mix"]) == {"mix": "/opt/elixir/bin/mix"}

    def test_empty_env_value_ignored(self):
        config = Config(environ={"SSGBRIDGE_BIN_ZOLA": ""})

        assert config.binaries_for("zola", ["zola"]) == {}

    def test_set_binary(self):
        """Test pointing a program at a path."""
        config = Config(global_config={}, local_config={}, environ={})

        config.set_binary("zola", "zola", "/opt/zola", global_=False)
        assert config._local_config["adapters"]["zola"]["binaries"]["zola"] == "/opt/zola"
        assert config.binaries_for("zola", ["zola"]) == {"zola": "/opt/zola"}

        config.set_enabled("hakyll", False, global_=True)
        assert config._global_config["adapters"]["hakyll"]["enabled"] is False
        assert config.is_enabled("hakyll") is False

    def test_save_local_scope(self, temp_config_dir, monkeypatch):
        """Local changes land in the nearest project config, created on demand."""
        monkeypatch.setattr(Config, "GLOBAL_CONFIG_DIR", temp_config_dir / "home")
        monkeypatch.chdir(temp_config_dir)
        config = Config(environ={})

        config.set_binary("zola", "zola", "/opt/zola")
        path = config.save()

        assert path == temp_config_dir / ".ssgbridge" / "config.yaml"
        assert Config.load().binaries_for("zola", ["zola"]) == {"zola": "/opt/zola"}
        assert not (temp_config_dir / "home" / "config.yaml").exists()

    def test_save_global_scope(self, temp_config_dir, monkeypatch):
        monkeypatch.setattr(Config, "GLOBAL_CONFIG_DIR", temp_config_dir / "home")
        config = Config(environ={})

        config.set_enabled("hakyll", False, global_=True)
        path = config.save(global_=True)

        assert path == temp_config_dir / "home" / "config.yaml"
        assert yaml.safe_load(path.read_text()) == {"adapters": {"hakyll": {"enabled": False}}}

    def test_invalid_config_raises(self):
        config = Config(global_config={"adapters": {"zola": {"enabled": "sometimes"}}})

        with pytest.raises(ConfigError):
            config.merged

    def test_invalid_log_level_raises(self):
        config = Config(global_config={"logging": {"level": "CHATTY"}})

        with pytest.raises(ConfigError):
            config.merged

    def test_log_level_normalized(self):
        config = Config(global_config={"logging": {"level": "debug"}})

        assert config.logging.level == "DEBUG"

    def test_load_yaml(self, temp_config_dir):
        path = temp_config_dir / "config.yaml"
        path.write_text("adapters:\n  zola:\n    enabled: false\n")

        assert Config._load_yaml(path) == {"adapters": {"zola": {"enabled": False}}}

    def test_load_yaml_missing_and_empty(self, temp_config_dir):
        empty = temp_config_dir / "empty.yaml"
        empty.write_text("")

        assert Config._load_yaml(temp_config_dir / "nope.yaml") == {}
        assert Config._load_yaml(None) == {}
        assert Config._load_yaml(empty) == {}

    def test_load_yaml_invalid(self, temp_config_dir):
        bad = temp_config_dir / "bad.yaml"
        bad.write_text("adapters: [unclosed\n")

        with pytest.raises(ConfigError):
            Config._load_yaml(bad)

    def test_load_yaml_not_a_mapping(self, temp_config_dir):
        bad = temp_config_dir / "list.yaml"
        bad.write_text("- zola\n- hakyll\n")

        with pytest.raises(ConfigError):
            Config._load_yaml(bad)

    def test_load_merges_global_and_local(self, temp_config_dir, monkeypatch):
        """Config.load reads ~/.ssgbridge and the nearest .ssgbridge above cwd."""
        global_dir = temp_config_dir / "home" / ".ssgbridge"
        global_dir.mkdir(parents=True)
        (global_dir / "config.yaml").write_text(
            yaml.dump({"adapters": {"zola": {"binaries": {"zola": "/opt/zola"}}}})
        )

        project = temp_config_dir / "project"
        (project / ".ssgbridge").mkdir(parents=True)
        (project / ".ssgbridge" / "config.yaml").write_text(
            yaml.dump({"adapters": {"zola": {"enabled": False}}})
        )
        nested = project / "content" / "posts"
        nested.mkdir(parents=True)

        monkeypatch.setattr(Config, "GLOBAL_CONFIG_DIR", global_dir)
        monkeypatch.chdir(nested)

        config = Config.load()

        assert config.is_enabled("zola") is False
        assert config.get_adapter_settings("zola").binaries == {"zola": "/opt/zola"}

    def test_create_default_local(self, temp_config_dir):
        path = Config.create_default_local(temp_config_dir)

        assert path == temp_config_dir / ".ssgbridge" / "config.yaml"
        data = yaml.safe_load(path.read_text())
        assert data["logging"]["level"] == "WARNING"

        # Existing files are left alone
        path.write_text("logging:\n  level: DEBUG\n")
        Config.create_default_local(temp_config_dir)
        assert "DEBUG" in path.read_text()


class TestEnvVarFor:
    """Tests for environment variable naming."""

    @pytest.mark.parametrize(
        "program, expected",
        [
            ("zola", "SSGBRIDGE_BIN_ZOLA"),
            ("./gradlew", "SSGBRIDGE_BIN_GRADLEW"),
            ("nimble-publisher", "SSGBRIDGE_BIN_NIMBLE_PUBLISHER"),
        ],
    )
    def test_names(self, program, expected):
        assert env_var_for(program) == expected


class TestBridgeConfig:
    """Tests for BridgeConfig schema."""

    def test_default_config(self):
        """Test creating default configuration."""
        config = BridgeConfig()

        assert config.logging.level == "WARNING"
        assert len(config.adapters) == 0

    def test_config_with_adapters(self):
        """Test configuration with adapters."""
        config = BridgeConfig(
            adapters={
                "hakyll": {
                    "enabled": True,
                    "binaries": {"stack": "/usr/local/bin/stack"},
                }
            }
        )

        assert isinstance(config.adapters["hakyll"], AdapterSettings)
        assert config.adapters["hakyll"].binaries["stack"] == "/usr/local/bin/stack"
