"""Tests for swagme.config.json handling."""

import json
from pathlib import Path

import pytest

from swagme.config import (
    CONFIG_FILE,
    SwagmeConfig,
    delete_config,
    load_config,
    project_path,
    save_config,
)
from swagme.errors import ConfigError


class TestSwagmeConfig:
    """Test the config model."""

    def test_defaults(self):
        config = SwagmeConfig()
        assert config.authorization == "none"
        assert config.database == "unknown"
        assert config.routes == "/routes"
        assert config.docs == "/docs"
        assert config.gitignore is True

    def test_values_are_lowered(self):
        config = SwagmeConfig(authorization="Bearer", database="Prisma")
        assert config.authorization == "bearer"
        assert config.database == "prisma"

    def test_blank_values_fall_back(self):
        config = SwagmeConfig.model_validate(
            {"authorization": "", "database": None}
        )
        assert config.authorization == "none"
        assert config.database == "unknown"

    def test_schema_alias(self):
        config = SwagmeConfig.model_validate({"schema": "/models"})
        assert config.schema_path == "/models"
        assert json.loads(config.to_json())["schema"] == "/models"


class TestConfigFile:
    """Test loading and saving."""

    def test_missing(self, tmp_path: Path):
        assert load_config(tmp_path) is None

    def test_round_trip(self, tmp_path: Path):
        config = SwagmeConfig(name="api", schema="/models", gitignore=False)
        save_config(tmp_path, config)
        assert load_config(tmp_path) == config

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text('{"name": "a", "extra": 1}')
        assert load_config(tmp_path).name == "a"

    @pytest.mark.parametrize(
        "content",
        ["{not json", "[1, 2]", '{"authorization": "oauth"}'],
    )
    def test_invalid(self, tmp_path: Path, content: str):
        (tmp_path / CONFIG_FILE).write_text(content)
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_delete(self, tmp_path: Path):
        save_config(tmp_path, SwagmeConfig(name="api"))
        assert delete_config(tmp_path) is True
        assert not (tmp_path / CONFIG_FILE).exists()
        assert delete_config(tmp_path) is False


class TestProjectPath:
    """Test folder value resolution."""

    @pytest.mark.parametrize(
        ("value", "rel"),
        [
            ("/routes", "routes"),
            ("./src/routes", "src/routes"),
            ("src/routes/", "src/routes"),
            ("/", ""),
            ("", ""),
        ],
    )
    def test_project_path(self, tmp_path: Path, value: str, rel: str):
        assert project_path(tmp_path, value) == (
            tmp_path / rel if rel else tmp_path
        )
