"""
Tests for infra/config/ module.

Tests the configuration system:
- Library config loading/saving/merging
- Env var expansion
- Provider and key pool policy schemas
- Environment-driven application settings

All tests use temporary directories - no production data touched.
"""

import pytest
import yaml
from pathlib import Path
from pydantic import ValidationError

from infra.config import (
    AppConfig,
    LibraryConfig,
    ProviderConfig,
    KeyPoolConfig,
    DefaultsConfig,
    LibraryConfigManager,
    resolve_env_vars,
    load_library_config,
    OPENAI_CHAT,
    ANTHROPIC_MESSAGES,
)


@pytest.fixture
def library_manager(tmp_storage):
    """Create a LibraryConfigManager with temp storage."""
    return LibraryConfigManager(tmp_storage)


# =============================================================================
# Schema Tests
# =============================================================================

class TestResolveEnvVars:
    """Test environment variable resolution."""

    def test_resolves_single_var(self, monkeypatch):
        monkeypatch.setenv("TEST_ENDPOINT", "https://proxy.local/v1")
        assert resolve_env_vars("${TEST_ENDPOINT}") == "https://proxy.local/v1"

    def test_missing_var_becomes_empty(self, monkeypatch):
        monkeypatch.delenv("DEFINITELY_NOT_SET", raising=False)
        assert resolve_env_vars("${DEFINITELY_NOT_SET}") == ""

    def test_literal_string_unchanged(self):
        assert resolve_env_vars("https://api.openai.com") == "https://api.openai.com"

    def test_mixed_literal_and_var(self, monkeypatch):
        monkeypatch.setenv("HOST", "example.com")
        assert resolve_env_vars("https://${HOST}/v1/messages") == "https://example.com/v1/messages"


class TestProviderConfig:
    def test_minimal_provider(self):
        config = ProviderConfig(type=OPENAI_CHAT, endpoint="https://x/v1/chat/completions", model="m")
        assert config.temperature == 0.1
        assert config.top_p is None
        assert config.timeout == 120.0
        assert config.max_dimension == 2048
        assert config.extra == {}

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError, match="Unknown provider type"):
            ProviderConfig(type="grpc", endpoint="x", model="m")

    def test_resolved_endpoint_expands_env(self, monkeypatch):
        monkeypatch.setenv("GLM_HOST", "glm.internal")
        config = ProviderConfig(type=OPENAI_CHAT, endpoint="https://${GLM_HOST}/chat", model="glm-4v")
        assert config.resolved_endpoint() == "https://glm.internal/chat"


class TestKeyPoolConfig:
    def test_defaults(self):
        policy = KeyPoolConfig()
        assert policy.cooldown_seconds == 60.0
        assert policy.wait_seconds == 5.0
        assert policy.max_attempts == 6
        assert policy.max_failures == 3

    def test_ceilings_must_be_positive(self):
        with pytest.raises(ValidationError):
            KeyPoolConfig(max_attempts=0)
        with pytest.raises(ValidationError):
            KeyPoolConfig(max_failures=0)


class TestLibraryConfig:
    def test_empty_config_valid(self):
        config = LibraryConfig()
        assert config.providers == {}
        assert config.defaults == DefaultsConfig()
        assert config.get_provider("glm") is None

    def test_with_defaults_defines_all_providers(self):
        config = LibraryConfig.with_defaults()

        assert set(config.providers) == {"glm", "openai", "claude"}
        assert config.providers["glm"].type == OPENAI_CHAT
        assert config.providers["glm"].model == "glm-4v"
        assert config.providers["glm"].top_p == 0.7
        assert config.providers["openai"].type == OPENAI_CHAT
        assert config.providers["claude"].type == ANTHROPIC_MESSAGES
        assert config.defaults.provider == "glm"
        assert config.defaults.dpi == 150


# =============================================================================
# Manager Tests
# =============================================================================

class TestLibraryConfigManager:
    def test_load_without_file_returns_defaults(self, library_manager):
        assert not library_manager.exists()
        config = library_manager.load()
        assert set(config.providers) == {"glm", "openai", "claude"}

    def test_save_and_load_roundtrip(self, library_manager):
        config = LibraryConfig.with_defaults()
        config.keypool.cooldown_seconds = 30

        library_manager.save(config)

        assert library_manager.exists()
        loaded = library_manager.load()
        assert loaded.keypool.cooldown_seconds == 30
        assert loaded.providers["claude"].model == config.providers["claude"].model

    def test_saved_file_is_yaml_without_nulls(self, library_manager):
        library_manager.save(LibraryConfig.with_defaults())

        with open(library_manager.config_path) as f:
            data = yaml.safe_load(f)

        assert "top_p" not in data["providers"]["openai"]
        assert data["providers"]["glm"]["top_p"] == 0.7

    def test_update_deep_merges(self, library_manager):
        library_manager.save(LibraryConfig.with_defaults())

        updated = library_manager.update({
            "keypool": {"max_attempts": 4},
            "providers": {"glm": {"model": "glm-4v-plus"}},
        })

        assert updated.keypool.max_attempts == 4
        assert updated.keypool.max_failures == 3
        assert updated.providers["glm"].model == "glm-4v-plus"
        assert updated.providers["glm"].endpoint.startswith("https://open.bigmodel.cn")

    def test_invalid_update_leaves_file_untouched(self, library_manager):
        library_manager.save(LibraryConfig.with_defaults())
        before = library_manager.config_path.read_text()

        with pytest.raises(ValidationError):
            library_manager.update({"keypool": {"max_attempts": 0}})

        assert library_manager.config_path.read_text() == before

    def test_set_value_nested_field(self, library_manager):
        library_manager.save(LibraryConfig.with_defaults())

        config = library_manager.set_value("providers.claude.timeout", 45)

        assert config.providers["claude"].timeout == 45
        assert library_manager.load().providers["claude"].timeout == 45
        assert library_manager.load().providers["glm"].timeout == 120.0

    def test_set_value_extra_accepts_new_names(self, library_manager):
        config = library_manager.set_value("providers.glm.extra.do_sample", False)

        assert config.providers["glm"].extra == {"do_sample": False}

    @pytest.mark.parametrize("key", ["keypool", "keypool.max_tries", "providers.gemini.model", "defaults..dpi"])
    def test_set_value_rejects_unknown_keys(self, library_manager, key):
        with pytest.raises(ValueError):
            library_manager.set_value(key, 1)

        assert not library_manager.exists()

    def test_partial_file_fills_defaults(self, library_manager, tmp_storage):
        with open(tmp_storage / "config.yaml", "w") as f:
            yaml.dump({"defaults": {"provider": "claude"}}, f)

        config = load_library_config(tmp_storage)

        assert config.defaults.provider == "claude"
        assert config.defaults.dpi == 150
        assert config.keypool.max_attempts == 6


class TestAppConfig:
    def test_paths_derive_from_storage_root(self, tmp_path):
        config = AppConfig(storage_root=tmp_path / "root")

        assert config.keys_file == (tmp_path / "root" / "keys.json").resolve()
        assert config.documents_dir.name == "documents"
        assert config.logs_dir.name == "logs"

    def test_storage_root_expands_user(self):
        config = AppConfig(storage_root=Path("~/smartmd-test"))
        assert "~" not in str(config.storage_root)

    def test_log_level_normalized(self):
        assert AppConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            AppConfig(log_level="LOUD")

    def test_frozen(self, tmp_path):
        config = AppConfig(storage_root=tmp_path)
        with pytest.raises(ValidationError):
            config.secret_key = "x"
