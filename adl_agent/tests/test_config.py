"""Tests for configuration loading -- file, environment and defaults."""

import json
import os
import pytest
from unittest.mock import patch


@pytest.fixture
def clean_env():
    """Empty environment and no .env lookup"""
    with patch.dict(os.environ, {}, clear=True), \
         patch("adl_agent.common.config.load_dotenv"):
        yield


class TestDefaults:
    def test_config_defaults(self):
        from adl_agent.common.config import ADLConfig
        cfg = ADLConfig()
        assert cfg.mcp.server_path == ""
        assert cfg.mcp.command == "node"
        assert cfg.mcp.args == ["dist/index.js"]
        assert cfg.mcp.tool_name == "adl_create"
        assert cfg.defaults.author == "DK"
        assert cfg.defaults.fact_sheet == "LeanIX"
        assert cfg.defaults.status == "Proposed"
        assert cfg.agent.port == 3978

    def test_missing_file(self, tmp_path, clean_env):
        from adl_agent.common.config import load_config
        with patch("adl_agent.common.config.CONFIG_PATH", tmp_path / "missing.json"):
            cfg = load_config()
        assert cfg.defaults.author == "DK"


class TestLoadConfig:
    def test_load_from_file(self, tmp_path, clean_env):
        from adl_agent.common.config import load_config
        config_data = {
            "mcp": {"server_path": "/srv/adl-mcp", "args": "build/server.js --stdio"},
            "defaults": {"author": "Jo", "status": "Accepted"},
            "agent": {"port": 8080},
        }
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps(config_data))

        with patch("adl_agent.common.config.CONFIG_PATH", config_file):
            cfg = load_config()

        assert cfg.mcp.server_path == "/srv/adl-mcp"
        assert cfg.mcp.args == ["build/server.js", "--stdio"]
        assert cfg.defaults.author == "Jo"
        assert cfg.defaults.fact_sheet == "LeanIX"
        assert cfg.defaults.status == "Accepted"
        assert cfg.agent.port == 8080

    def test_env_overrides_file(self, tmp_path, clean_env):
        from adl_agent.common.config import load_config
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"defaults": {"author": "Jo"}}))

        env = {
            "ADL_DEFAULT_AUTHOR": "Sam",
            "ADL_DEFAULT_FACTSHEET": "OTCAS",
            "ADL_MCP_SERVER_PATH": "/opt/adl",
            "ADL_MCP_ARGS": "dist/index.js --verbose",
            "PORT": "4000",
        }
        with patch("adl_agent.common.config.CONFIG_PATH", config_file), \
             patch.dict(os.environ, env):
            cfg = load_config()

        assert cfg.defaults.author == "Sam"
        assert cfg.defaults.fact_sheet == "OTCAS"
        assert cfg.mcp.server_path == "/opt/adl"
        assert cfg.mcp.args == ["dist/index.js", "--verbose"]
        assert cfg.agent.port == 4000

    def test_invalid_port_ignored(self, tmp_path, clean_env):
        from adl_agent.common.config import load_config
        with patch("adl_agent.common.config.CONFIG_PATH", tmp_path / "missing.json"), \
             patch.dict(os.environ, {"ADL_PORT": "not-a-port"}):
            cfg = load_config()
        assert cfg.agent.port == 3978

    def test_invalid_json_falls_back(self, tmp_path, clean_env):
        from adl_agent.common.config import load_config
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json")

        with patch("adl_agent.common.config.CONFIG_PATH", config_file):
            cfg = load_config()

        assert cfg.defaults.author == "DK"
