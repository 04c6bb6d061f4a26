from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
STORE_UNAVAILABLE = -32003
RECIPE_NOT_FOUND = -32004


class RPCRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    jsonrpc: str = JSONRPC_VERSION
    protocol_version: str | None = Field(default=None, alias="protocolVersion")
    id: Any = None
    method: str
    params: Any = None


class RPCError(BaseModel):
    code: int
    message: str


class RPCResponse(BaseModel):
    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: Any = None
    error: RPCError | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump()
        else:
            payload["result"] = self.result
        return payload


class MCPTool(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")


class MCPResource(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uri: str
    name: str
    description: str
    mime_type: str = Field(default="application/json", alias="mimeType")
