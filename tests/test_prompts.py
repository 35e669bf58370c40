"""Tests for the interactive config questions."""

import pytest
from rich.prompt import Confirm, Prompt

from swagme.config import SwagmeConfig
from swagme.prompts import PromptDefaults, ask_project_config

PACKAGE = {"name": "shop-api", "version": "2.1.0", "dependencies": {}}


@pytest.fixture
def accept_defaults(monkeypatch):
    """Answer every question with its default and record the questions."""
    asked = []

    def answer(question, *args, default=None, **kwargs):
        asked.append(question)
        return default

    monkeypatch.setattr(Prompt, "ask", answer)
    monkeypatch.setattr(Confirm, "ask", answer)
    return asked


class TestPromptDefaults:
    """Test the starting answers."""

    def test_existing_config_wins(self):
        existing = SwagmeConfig(name="saved", routes="/api")
        defaults = PromptDefaults("express", PACKAGE, existing=existing)
        assert defaults.initial() is existing

    def test_from_package_json(self):
        defaults = PromptDefaults(
            "express", PACKAGE, main_file="/app.js", orm="mongoose"
        )
        config = defaults.initial()
        assert config.name == "shop-api"
        assert config.version == "2.1.0"
        assert config.main == "/app.js"
        assert config.database == "mongoose"
        assert config.schema_path == "/models"
        assert config.routes == "/routes"

    def test_nextjs_routes(self):
        config = PromptDefaults("nextjs", {"dependencies": {}}).initial()
        assert config.name == ""
        assert config.routes == "/pages/api"


class TestAskProjectConfig:
    """Test the question flow."""

    def test_express_questions(self, accept_defaults):
        defaults = PromptDefaults("express", PACKAGE, main_file="/app.js")
        config = ask_project_config(defaults)
        assert config.name == "shop-api"
        assert config.main == "/app.js"
        # unknown database falls back to the first choice
        assert config.database == "mongoose"
        assert any("express app" in q for q in accept_defaults)

    def test_nextjs_skips_main_file(self, accept_defaults):
        config = ask_project_config(PromptDefaults("nextjs", PACKAGE))
        assert config.main == ""
        assert config.routes == "/pages/api"
        assert not any("express app" in q for q in accept_defaults)
