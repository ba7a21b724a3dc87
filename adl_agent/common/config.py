"""
Configuration Management for the ADL Agent

Loads configuration from ~/.adl/config.json, a .env file and environment variables.
"""

import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

logger = logging.getLogger("adl.config")

# Default config paths
CONFIG_DIR = Path.home() / ".adl"
CONFIG_PATH = CONFIG_DIR / "config.json"

DEFAULT_MCP_ARGS = ["dist/index.js"]


@dataclass
class MCPServerConfig:
    """ADL-MCP server launch configuration"""
    server_path: str = ""
    command: str = "node"
    args: List[str] = field(default_factory=lambda: list(DEFAULT_MCP_ARGS))
    tool_name: str = "adl_create"


@dataclass
class DefaultsConfig:
    """Fallback values for fields a decision did not set"""
    author: str = "DK"
    fact_sheet: str = "LeanIX"
    status: str = "Proposed"


@dataclass
class AgentConfig:
    """Webhook server configuration"""
    host: str = "0.0.0.0"
    port: int = 3978
    slack_signing_secret: str = ""
    log_level: str = "INFO"


@dataclass
class ADLConfig:
    """Main ADL agent configuration"""
    mcp: MCPServerConfig = field(default_factory=MCPServerConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)


def _parse_args(value) -> List[str]:
    """Accept args as a list or as a space separated string"""
    if isinstance(value, str):
        return value.split()
    if isinstance(value, list):
        return [str(v) for v in value]
    return list(DEFAULT_MCP_ARGS)


def _parse_mcp_config(data: dict) -> MCPServerConfig:
    """Parse mcp section from config dict"""
    mcp_data = data.get("mcp", {})
    return MCPServerConfig(
        server_path=mcp_data.get("server_path", ""),
        command=mcp_data.get("command", "node"),
        args=_parse_args(mcp_data.get("args", DEFAULT_MCP_ARGS)),
        tool_name=mcp_data.get("tool_name", "adl_create"),
    )


def _parse_defaults_config(data: dict) -> DefaultsConfig:
    """Parse defaults section from config dict"""
    defaults_data = data.get("defaults", {})
    return DefaultsConfig(
        author=defaults_data.get("author", "DK"),
        fact_sheet=defaults_data.get("fact_sheet", "LeanIX"),
        status=defaults_data.get("status", "Proposed"),
    )


def _parse_agent_config(data: dict) -> AgentConfig:
    """Parse agent section from config dict"""
    agent_data = data.get("agent", {})
    return AgentConfig(
        host=agent_data.get("host", "0.0.0.0"),
        port=agent_data.get("port", 3978),
        slack_signing_secret=agent_data.get("slack_signing_secret", ""),
        log_level=agent_data.get("log_level", "INFO"),
    )


def load_config(env_file: str = None) -> ADLConfig:
    """
    Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (including a .env file)
    2. Config file (~/.adl/config.json)
    3. Default values
    """
    load_dotenv(env_file)
    config = ADLConfig()

    # Load from config file if exists
    if CONFIG_PATH.exists():
        try:
            with open(CONFIG_PATH) as f:
                data = json.load(f)

            config.mcp = _parse_mcp_config(data)
            config.defaults = _parse_defaults_config(data)
            config.agent = _parse_agent_config(data)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("Failed to load config file %s: %s", CONFIG_PATH, e)

    # Environment variable overrides
    if os.getenv("ADL_MCP_SERVER_PATH"):
        config.mcp.server_path = os.getenv("ADL_MCP_SERVER_PATH")
    if os.getenv("ADL_MCP_COMMAND"):
        config.mcp.command = os.getenv("ADL_MCP_COMMAND")
    if os.getenv("ADL_MCP_ARGS"):
        config.mcp.args = _parse_args(os.getenv("ADL_MCP_ARGS"))
    if os.getenv("ADL_MCP_TOOL"):
        config.mcp.tool_name = os.getenv("ADL_MCP_TOOL")

    _env_defaults_map = {
        "ADL_DEFAULT_AUTHOR": "author",
        "ADL_DEFAULT_FACTSHEET": "fact_sheet",
        "ADL_DEFAULT_STATUS": "status",
    }
    for env_var, attr in _env_defaults_map.items():
        val = os.getenv(env_var)
        if val:
            setattr(config.defaults, attr, val)

    port = os.getenv("ADL_PORT") or os.getenv("PORT")
    if port:
        try:
            config.agent.port = int(port)
        except ValueError:
            logger.warning("Ignoring invalid port value: %s", port)
    if os.getenv("ADL_HOST"):
        config.agent.host = os.getenv("ADL_HOST")
    if os.getenv("SLACK_SIGNING_SECRET"):
        config.agent.slack_signing_secret = os.getenv("SLACK_SIGNING_SECRET")
    if os.getenv("ADL_LOG_LEVEL"):
        config.agent.log_level = os.getenv("ADL_LOG_LEVEL")

    return config


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the agent process"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
