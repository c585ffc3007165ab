import importlib
from unittest.mock import patch

from kilocode_provider import config as config_mod
from kilocode_provider.config import (
    API_KEY_PLACEHOLDER,
    FALLBACK_MODELS,
    PROVIDER_INFO,
    is_unresolved_placeholder,
)


class TestPlaceholder:
    def test_placeholder_literal(self):
        assert API_KEY_PLACEHOLDER == "{env:KILOCODE_API_KEY}"

    def test_unresolved_values(self):
        assert is_unresolved_placeholder(None)
        assert is_unresolved_placeholder("")
        assert is_unresolved_placeholder("{env:KILOCODE_API_KEY}")

    def test_real_key_is_resolved(self):
        assert not is_unresolved_placeholder("sk-test-123")
        # Only the exact token counts as a placeholder.
        assert not is_unresolved_placeholder("{env:OTHER_KEY}")


class TestCatalogue:
    def test_provider_identity(self):
        assert PROVIDER_INFO["name"] == "kilocode.ai"
        assert PROVIDER_INFO["user_agent"] == f"Kilo-Code/{PROVIDER_INFO['version']}"

    def test_fallback_table_size(self):
        assert len(FALLBACK_MODELS) == 18
        assert all(mid and name for mid, name in FALLBACK_MODELS.items())


class TestSettings:
    def test_defaults(self):
        settings = config_mod.Settings()
        assert settings.models_url == "https://openrouter.ai/api/v1/models"
        assert settings.base_url == "https://kilocode.ai/api/openrouter"
        assert settings.catalog_ttl == 0
        assert settings.live_models is False
        assert settings.exit_on_missing_key is True

    def test_env_override(self):
        with patch.dict(
            "os.environ",
            {
                "KILOCODE_CATALOG_TTL": "600",
                "KILOCODE_LIVE_MODELS": "yes",
                "KILOCODE_EXIT_ON_MISSING_KEY": "false",
            },
        ):
            reloaded = importlib.reload(config_mod)
            settings = reloaded.Settings()
            assert settings.catalog_ttl == 600
            assert settings.live_models is True
            assert settings.exit_on_missing_key is False
        importlib.reload(config_mod)

    def test_initialize_env_does_not_override(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("KILOCODE_API_KEY=from-dotenv\nKILOCODE_TEST_ONLY=loaded\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("KILOCODE_API_KEY", "from-env")
        monkeypatch.delenv("KILOCODE_TEST_ONLY", raising=False)

        config_mod.initialize_env()

        import os

        assert os.environ["KILOCODE_API_KEY"] == "from-env"
        assert os.environ["KILOCODE_TEST_ONLY"] == "loaded"
        monkeypatch.delenv("KILOCODE_TEST_ONLY")
