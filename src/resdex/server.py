"""Resdex stdio server: line-delimited JSON-RPC 2.0.

Methods: initialize, ping, tools/list, tools/call. Tool arguments are
validated with pydantic models; tool results are returned as a text content
block, with ``isError`` set for not-found and for tool failures.

Usage:
    server = ResourceServer(registry)
    server.serve(sys.stdin, sys.stdout)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TextIO

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from resdex.query.tools import (
    DEFAULT_LIMIT,
    GetResourceContentTool,
    ListResourcesTool,
    SearchResourcesTool,
)
from resdex.registry.registry import ResourceRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "resdex"
PROTOCOL_VERSION = "2024-11-05"


class ErrorCodes:
    """JSON-RPC 2.0 error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


# ─── Tool parameters ────────────────────────────────────────────────────────


class ListParams(BaseModel):
    model_config = ConfigDict(extra="ignore")

    prefix: str | None = Field(default=None, description="Optional id prefix, e.g. 'tests|unit'")
    limit: int | None = Field(default=None, description="Page size (default 15)")
    page: int | None = Field(default=None, description="1-based page number (default 1)")


class SearchParams(BaseModel):
    model_config = ConfigDict(extra="ignore")

    phrases: list[str] = Field(description="Phrases to match as whole words (any may match)")
    limit: int | None = Field(default=None, description="Page size (default 15)")
    page: int | None = Field(default=None, description="1-based page number (default 1)")


class ContentParams(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(description="Exact resource id")
    show_children: bool = Field(
        default=False, alias="showChildren", description="Append the resource's children"
    )


@dataclass
class ToolSpec:
    name: str
    description: str
    params: type[BaseModel]
    handler: Callable[[Any], dict[str, Any]]

    def to_definition(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.params.model_json_schema(by_alias=True),
        }


# ─── Server ─────────────────────────────────────────────────────────────────


class ResourceServer:
    """Dispatches JSON-RPC requests to the three query tools."""

    def __init__(
        self,
        registry: ResourceRegistry,
        *,
        version: str = "dev",
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        self.registry = registry
        self.version = version
        list_tool = ListResourcesTool(registry, default_limit)
        search_tool = SearchResourcesTool(registry, default_limit)
        content_tool = GetResourceContentTool(registry)

        specs = [
            ToolSpec(
                name="getAvailableResources",
                description=(
                    "List resources (metadata only, no content), sorted by importance "
                    "then id and paginated. Optional prefix narrows by id, e.g. 'tests|unit'."
                ),
                params=ListParams,
                handler=lambda p: _json_text(list_tool.execute(p.prefix, p.limit, p.page)),
            ),
            ToolSpec(
                name="getResourceContent",
                description="Full content of one resource, optionally with its children.",
                params=ContentParams,
                handler=lambda p: _content(content_tool.execute(p.id, p.show_children)),
            ),
            ToolSpec(
                name="findResourceByPhrases",
                description="Search resources by phrases (case-insensitive whole-word match).",
                params=SearchParams,
                handler=lambda p: _json_text(search_tool.execute(p.phrases, p.limit, p.page)),
            ),
        ]
        self.tools: dict[str, ToolSpec] = {t.name: t for t in specs}

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def serve(self, stdin: TextIO, stdout: TextIO) -> None:
        """Read one JSON request per line until EOF; write one response per line."""
        logger.info("Resdex server running via stdio (%d resources)", self.registry.count)
        for line in stdin:
            line = line.strip()
            if not line:
                continue
            response = self.handle_line(line)
            if response is not None:
                stdout.write(json.dumps(response) + "\n")
                stdout.flush()

    def handle_line(self, line: str) -> dict[str, Any] | None:
        try:
            request = json.loads(line)
        except json.JSONDecodeError:
            return _error(None, ErrorCodes.PARSE_ERROR, "Invalid JSON")
        if not isinstance(request, dict):
            return _error(None, ErrorCodes.INVALID_REQUEST, "Request must be a JSON object")
        return self.handle_request(request)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle_request(self, request: dict[str, Any]) -> dict[str, Any] | None:
        """Dispatch one request. Notifications (no ``id``) get no response."""
        method = request.get("method", "")
        if "id" not in request:
            logger.debug("Notification %s", method)
            return None
        request_id = request["id"]

        if method == "initialize":
            return _ok(
                request_id,
                {
                    "protocolVersion": PROTOCOL_VERSION,
                    "serverInfo": {"name": SERVER_NAME, "version": self.version},
                    "capabilities": {"tools": {}},
                },
            )
        if method == "ping":
            return _ok(request_id, {})
        if method == "tools/list":
            return _ok(request_id, {"tools": [t.to_definition() for t in self.tools.values()]})
        if method == "tools/call":
            params = request.get("params") or {}
            if not isinstance(params, dict):
                return _error(request_id, ErrorCodes.INVALID_PARAMS, "params must be an object")
            return self._handle_tool_call(request_id, params)

        return _error(request_id, ErrorCodes.METHOD_NOT_FOUND, f"Unknown method: {method}")

    def _handle_tool_call(self, request_id: Any, params: dict[str, Any]) -> dict[str, Any]:
        tool_name = params.get("name", "")
        tool = self.tools.get(tool_name) if isinstance(tool_name, str) else None
        if tool is None:
            return _error(request_id, ErrorCodes.METHOD_NOT_FOUND, f"Unknown tool: {tool_name}")

        try:
            args = tool.params.model_validate(params.get("arguments") or {})
        except ValidationError as exc:
            return _error(request_id, ErrorCodes.INVALID_PARAMS, f"Invalid parameters: {exc}")

        try:
            result = tool.handler(args)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Tool %s failed", tool_name)
            result = {"content": [{"type": "text", "text": f"Error: {exc}"}], "isError": True}
        return _ok(request_id, result)


# ─── Response helpers ───────────────────────────────────────────────────────


def _json_text(payload: dict[str, Any]) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": json.dumps(payload, indent=2)}]}


def _content(result: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {"content": [{"type": "text", "text": result["text"]}]}
    if result.get("isError"):
        out["isError"] = True
    return out


def _ok(request_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _error(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}
