"""Tests for journal_chat.core.config."""

import json
import os

import pytest
import yaml

from journal_chat.core.config import DEFAULT_MODEL, Config, get_config, reset_config
from journal_chat.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _reset_singleton():
    """Reset config singleton between tests."""
    reset_config()
    yield
    reset_config()


class TestConfig:
    def test_defaults(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("journal.path") == "Journal"
        assert config.get("llm.model") == DEFAULT_MODEL == "ollama/llama3.2:latest"
        assert config.get("logging.level") == "WARNING"

    def test_default_data_dir(self):
        config = Config()
        assert config.get("paths.data_dir").endswith(".journal-chat")

    def test_custom_data_dir(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("paths.data_dir") == tmp_dir
        assert config.get("paths.log_dir") == os.path.join(tmp_dir, "logs")

    def test_yaml_config_file(self, tmp_config_file, tmp_dir):
        config = Config(config_file=tmp_config_file, data_dir=tmp_dir)
        assert config.get("journal.path") == "Daily Notes"
        assert config.get("llm.model") == "ollama/mistral"
        # Untouched defaults survive the merge
        assert config.get("llm.api_base") == "http://localhost:11434"

    def test_json_config_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "config.json")
        with open(path, "w") as f:
            json.dump({"vault": {"path": "/notes"}}, f)
        config = Config(config_file=path, data_dir=tmp_dir)
        assert config.get("vault.path") == "/notes"

    def test_missing_config_file_uses_defaults(self, tmp_dir):
        config = Config(config_file=os.path.join(tmp_dir, "nope.yaml"), data_dir=tmp_dir)
        assert config.get("journal.path") == "Journal"

    def test_invalid_yaml_raises(self, tmp_dir):
        path = os.path.join(tmp_dir, "broken.yaml")
        with open(path, "w") as f:
            f.write("journal: [unclosed")
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            Config(config_file=path, data_dir=tmp_dir)

    def test_non_mapping_file_raises(self, tmp_dir):
        path = os.path.join(tmp_dir, "list.yaml")
        with open(path, "w") as f:
            yaml.dump(["a", "b"], f)
        with pytest.raises(ConfigurationError, match="mapping"):
            Config(config_file=path, data_dir=tmp_dir)

    def test_env_overrides_file(self, tmp_config_file, tmp_dir, monkeypatch):
        monkeypatch.setenv("JOURNAL_CHAT_JOURNAL__PATH", "From Env")
        config = Config(config_file=tmp_config_file, data_dir=tmp_dir)
        assert config.get("journal.path") == "From Env"

    def test_custom_env_prefix(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("MYAPP_LLM__MODEL", "gpt-4o")
        config = Config(env_prefix="MYAPP_", data_dir=tmp_dir)
        assert config.get("llm.model") == "gpt-4o"

    def test_get_missing_key(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "fallback") == "fallback"

    def test_set(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.set("custom.nested.value", 42)
        assert config.get("custom.nested.value") == 42

    def test_vault_path_is_absolute(self, tmp_dir):
        config = Config(data_dir=tmp_dir, defaults={"vault": {"path": tmp_dir}})
        assert config.get_vault_path() == os.path.abspath(tmp_dir)

    def test_save_value_writes_only_that_key(self, tmp_config_file, tmp_dir, monkeypatch):
        monkeypatch.setenv("JOURNAL_CHAT_LLM__API_BASE", "http://gpu-box:11434")
        config = Config(config_file=tmp_config_file, data_dir=tmp_dir)
        config.set("vault.path", "/somewhere/else")
        assert config.save_value("llm.model", "ollama/phi3") == tmp_config_file
        assert config.get("llm.model") == "ollama/phi3"

        with open(tmp_config_file) as f:
            written = yaml.safe_load(f)
        assert written == {
            "vault": {"path": tmp_dir},
            "journal": {"path": "Daily Notes"},
            "llm": {"model": "ollama/phi3"},
        }

    def test_save_value_keeps_json_format(self, tmp_dir):
        path = os.path.join(tmp_dir, "config.json")
        with open(path, "w") as f:
            json.dump({"journal": {"path": "Daily"}}, f)
        Config(config_file=path, data_dir=tmp_dir).save_value("llm.model", "ollama/phi3")

        with open(path) as f:
            assert json.load(f) == {"journal": {"path": "Daily"}, "llm": {"model": "ollama/phi3"}}

    def test_save_value_without_loaded_file_raises(self, tmp_dir):
        path = os.path.join(tmp_dir, "missing.yaml")
        config = Config(config_file=path, data_dir=tmp_dir)
        assert config.file_loaded is False
        with pytest.raises(ConfigurationError):
            config.save_value("llm.model", "ollama/phi3")
        assert not os.path.exists(path)

    def test_save_value_without_path_raises(self, tmp_dir):
        with pytest.raises(ConfigurationError):
            Config(data_dir=tmp_dir).save_value("llm.model", "ollama/phi3")


class TestGetConfig:
    def test_singleton(self, tmp_dir):
        c1 = get_config(data_dir=tmp_dir)
        c2 = get_config()
        assert c1 is c2

    def test_reset_clears_singleton(self, tmp_dir):
        c1 = get_config(data_dir=tmp_dir)
        reset_config()
        c2 = get_config(data_dir=tmp_dir)
        assert c1 is not c2
