import json

import pytest
import yaml

from exception_mapper import ConfigurationError, HandlerConfiguration, load_config
from exception_mapper.config import (
    ensure_handler_config,
    load_config_file,
    load_configuration_from_env,
    merge_configs
)

ENV_KEYS = [
    "EXCEPTION_MAPPER_STRICT_MODE",
    "EXCEPTION_MAPPER_JSON_LOGGING",
    "EXCEPTION_MAPPER_DUPLICATE_POLICY",
    "EXCEPTION_MAPPER_LOG_LEVEL",
    "EXCEPTION_MAPPER_LOG_FILE",
    "EXCEPTION_MAPPER_LOGGER_NAME",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    config = HandlerConfiguration()
    assert config.strict_mode is False
    assert config.duplicate_policy == "overwrite"
    assert config.log_level == "INFO"
    assert config.log_file is None
    assert config.logger_name == "exception_mapper"

def test_values_are_normalized():
    config = HandlerConfiguration(duplicate_policy="KEEP_FIRST", log_level="debug")
    assert config.duplicate_policy == "keep_first"
    assert config.log_level == "DEBUG"

@pytest.mark.parametrize("values", [
    {"duplicate_policy": "skip"},
    {"log_level": "loud"},
    {"unknown_setting": True},
])
def test_invalid_values_raise_configuration_error(values):
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        ensure_handler_config(values)

def test_ensure_handler_config_returns_instances_as_is():
    config = HandlerConfiguration(strict_mode=True)
    assert ensure_handler_config(config) is config
    assert ensure_handler_config(None) == HandlerConfiguration()

def test_load_yaml_file(tmp_path):
    path = tmp_path / "handler.yaml"
    path.write_text(yaml.safe_dump({"strict_mode": True, "log_level": "warning"}))

    assert load_config_file(str(path)) == {"strict_mode": True, "log_level": "warning"}

def test_load_json_file(tmp_path):
    path = tmp_path / "handler.json"
    path.write_text(json.dumps({"duplicate_policy": "keep_first"}))

    assert load_config_file(str(path)) == {"duplicate_policy": "keep_first"}

def test_empty_yaml_file(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")

    assert load_config_file(str(path)) == {}

def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_config_file(str(tmp_path / "missing.yaml"))

def test_unsupported_format(tmp_path):
    path = tmp_path / "handler.toml"
    path.write_text("strict_mode = true")

    with pytest.raises(ConfigurationError, match="Unsupported config file format"):
        load_config_file(str(path))

def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("strict_mode: [unclosed")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_config_file(str(path))

def test_non_mapping_file(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")

    with pytest.raises(ConfigurationError, match="must be a mapping"):
        load_config_file(str(path))

def test_env_configuration(monkeypatch):
    monkeypatch.setenv("EXCEPTION_MAPPER_STRICT_MODE", "yes")
    monkeypatch.setenv("EXCEPTION_MAPPER_LOG_LEVEL", "error")

    assert load_configuration_from_env() == {"strict_mode": True, "log_level": "error"}

def test_env_invalid_boolean(monkeypatch):
    monkeypatch.setenv("EXCEPTION_MAPPER_STRICT_MODE", "maybe")

    with pytest.raises(ConfigurationError, match="Invalid boolean"):
        load_configuration_from_env()

def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "handler.yaml"
    path.write_text(yaml.safe_dump({"strict_mode": True, "duplicate_policy": "keep_first"}))
    monkeypatch.setenv("EXCEPTION_MAPPER_STRICT_MODE", "false")

    config = load_config(str(path))

    assert config.strict_mode is False
    assert config.duplicate_policy == "keep_first"

def test_load_config_without_file():
    assert load_config() == HandlerConfiguration()

def test_merge_configs_is_recursive():
    base = {"a": 1, "nested": {"x": 1, "y": 2}}
    override = {"b": 2, "nested": {"y": 3}}

    assert merge_configs(base, override) == {"a": 1, "b": 2, "nested": {"x": 1, "y": 3}}
    assert base == {"a": 1, "nested": {"x": 1, "y": 2}}
