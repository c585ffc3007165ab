import json
from unittest.mock import AsyncMock, patch

import pytest

from kilocode_provider import cli
from kilocode_provider.models import ModelInfo


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    # Keep initialize_env from picking up a developer's .env file.
    monkeypatch.chdir(tmp_path)


def test_models_lists_static_table(capsys):
    assert cli.main(["models"]) == 0
    out = capsys.readouterr().out
    assert "--- Models (18 total) ---" in out
    assert "anthropic/claude-opus-4: Anthropic: Claude Opus 4" in out


def test_models_json(capsys):
    assert cli.main(["models", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["openai/gpt-5"] == {"name": "OpenAI: GPT-5"}


def test_models_live_uses_catalog(capsys):
    fetched = {"openai/gpt-5": ModelInfo(name="OpenAI: GPT-5")}
    with patch.object(
        cli.ModelCatalog, "get_available_models", new=AsyncMock(return_value=fetched)
    ):
        assert cli.main(["models", "--live"]) == 0
    out = capsys.readouterr().out
    assert "--- Models (1 total) ---" in out


def test_config_prints_provider_entry(api_key, capsys):
    assert cli.main(["config"]) == 0
    data = json.loads(capsys.readouterr().out)
    entry = data["provider"]["kilocode.ai"]
    assert entry["options"]["apiKey"] == "sk-test-123"
    assert entry["options"]["headers"]["Authorization"] == "Bearer sk-test-123"


def test_config_without_key_exits_1(no_api_key, capsys):
    assert cli.main(["config"]) == 1
    assert capsys.readouterr().out == ""


def test_command_is_required():
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 2
