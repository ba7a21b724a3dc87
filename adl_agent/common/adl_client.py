"""
ADL-MCP Client

Talks to the ADL (architecture decision log) MCP server over stdio and
creates decision entries with the `adl_create` tool.

Usage:
    client = ADLClient()
    await client.connect("/opt/adl-mcp", "node", ["dist/index.js"])
    result = await client.create_entry(record)
    await client.disconnect()
"""

import logging
from contextlib import AsyncExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from fastmcp import Client
from fastmcp.client.transports import StdioTransport
from fastmcp.exceptions import ToolError

from .schemas import DecisionRecord

logger = logging.getLogger("adl.mcp_client")


class ADLClientError(Exception):
    """Error communicating with the ADL-MCP server."""
    pass


@dataclass
class CreateEntryResult:
    """Outcome of an adl_create call"""
    entry_id: str
    content: List[str]

    @classmethod
    def from_tool_result(cls, raw: Any) -> "CreateEntryResult":
        """
        Parse a call_tool result.

        Newer fastmcp versions return a CallToolResult with a `content` list,
        older ones return the content list directly.
        """
        content = getattr(raw, "content", raw) or []
        texts = [item.text for item in content if getattr(item, "text", None)]
        return cls(entry_id=texts[0] if texts else "Created", content=texts)


class ADLClient:
    """
    Async MCP client for the ADL record-keeping service.

    The server is launched as a subprocess; its script lives at
    `server_path/args[0]`.
    """

    def __init__(self, tool_name: str = "adl_create", client_factory=None):
        """
        Initialize ADL client.

        Args:
            tool_name: Name of the MCP tool that creates entries
            client_factory: Callable building an MCP client from a transport
                (defaults to fastmcp.Client)
        """
        self._tool_name = tool_name
        self._client_factory = client_factory or Client
        self._client: Optional[Client] = None
        self._stack: Optional[AsyncExitStack] = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @staticmethod
    def build_transport(server_path: str, command: str, args: List[str]) -> StdioTransport:
        """Build the stdio transport, resolving the script against server_path"""
        if not args:
            raise ADLClientError("ADL-MCP args must name the server script")
        full_path = str(Path(server_path) / args[0])
        return StdioTransport(command=command, args=[full_path, *args[1:]])

    async def connect(self, server_path: str, command: str = "node", args: Optional[List[str]] = None) -> None:
        """
        Connect to the ADL-MCP server.

        Raises:
            ADLClientError: If the server cannot be started or initialized
        """
        if self.is_connected:
            logger.info("Already connected to ADL-MCP server")
            return

        transport = self.build_transport(server_path, command, args or ["dist/index.js"])
        client = self._client_factory(transport)
        stack = AsyncExitStack()
        try:
            await stack.enter_async_context(client)
        except Exception as e:
            await stack.aclose()
            raise ADLClientError(f"Failed to connect to ADL-MCP server: {e}") from e

        self._client = client
        self._stack = stack
        logger.info("Connected to ADL-MCP server at %s (%s %s)", server_path, command, " ".join(transport.args))

    async def create_entry(self, record: DecisionRecord) -> CreateEntryResult:
        """
        Create a new ADL entry from a completed record.

        Raises:
            ADLClientError: If not connected or the tool call fails
        """
        if not self.is_connected:
            raise ADLClientError("Not connected to ADL-MCP server. Call connect() first.")

        arguments = record.to_tool_arguments()
        try:
            raw = await self._client.call_tool(self._tool_name, arguments)
        except ToolError as e:
            raise ADLClientError(f"{self._tool_name} failed: {e}") from e
        except Exception as e:
            logger.error("Failed to create ADL entry: %s", e)
            raise ADLClientError(f"Failed to create ADL entry: {e}") from e

        result = CreateEntryResult.from_tool_result(raw)
        logger.info("ADL entry created: %s", result.entry_id)
        return result

    async def disconnect(self) -> None:
        """Close the session and stop the server process"""
        if self._stack is not None:
            try:
                await self._stack.aclose()
            finally:
                self._stack = None
                self._client = None
            logger.info("Disconnected from ADL-MCP server")
