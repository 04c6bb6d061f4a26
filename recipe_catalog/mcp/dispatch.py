"""
JSON-RPC tool facade.

Routes MCP method names onto the shared recipe service and wraps the
output in protocol envelopes. No filtering logic lives here: tool
arguments go through ``parse_tool_arguments`` like every other surface.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable

from ..errors import RecipeNotFoundError, StoreUnavailableError
from ..filters.adapters import parse_tool_arguments, to_number
from ..filters.models import INTEGER_FIELDS, PARAM_FIELDS, TOOL_ROW_LIMIT
from ..filters.presets import DietPresetTable
from ..recipes.service import get_recipe, list_diet_plans, search_recipes
from ..recipes.store import RecipeStore
from .models import (
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    PROTOCOL_VERSION,
    RECIPE_NOT_FOUND,
    STORE_UNAVAILABLE,
    MCPResource,
    MCPTool,
    RPCError,
    RPCRequest,
    RPCResponse,
)

logger = logging.getLogger(__name__)

DIET_PLANS_URI = "recipe://diet-plans"

SERVER_INFO = {"name": "recipe-server", "version": "1.0.0"}


def _search_schema(presets: DietPresetTable) -> dict[str, Any]:
    properties: dict[str, Any] = {
        "search": {
            "type": "string",
            "description": "Text search in recipe name or description",
        },
        "diet": {
            "type": "string",
            "description": f"Diet plan filter ({', '.join(presets.names())})",
        },
        "include_ingredients": {
            "type": "string",
            "description": "Comma-separated ingredients to include",
        },
        "exclude_ingredients": {
            "type": "string",
            "description": "Comma-separated ingredients to exclude",
        },
    }
    for stem, column in PARAM_FIELDS.items():
        kind = "integer" if column in INTEGER_FIELDS else "number"
        label = stem.replace("_", " ")
        properties[f"min_{stem}"] = {"type": kind, "description": f"Minimum {label}"}
        properties[f"max_{stem}"] = {"type": kind, "description": f"Maximum {label}"}
    properties["sort_by"] = {
        "type": "string",
        "description": "Sort field (rating, calories, protein, carbs, prep_time_minutes, etc.)",
    }
    properties["sort_order"] = {"type": "string", "description": "Sort order (asc or desc)"}
    return {"type": "object", "properties": properties, "additionalProperties": True}


def list_tools(presets: DietPresetTable) -> list[MCPTool]:
    return [
        MCPTool(
            name="search_recipes",
            description=(
                "Search for recipes based on various criteria including diet plans, "
                "ingredients, nutritional values, and preparation time"
            ),
            input_schema=_search_schema(presets),
        ),
        MCPTool(
            name="get_recipe",
            description="Get detailed information about a specific recipe by ID",
            input_schema={
                "type": "object",
                "properties": {"id": {"type": "integer", "description": "Recipe ID"}},
                "required": ["id"],
            },
        ),
        MCPTool(
            name="get_diet_plans",
            description="Get list of available diet plans with their descriptions and filters",
            input_schema={"type": "object", "properties": {}},
        ),
    ]


RESOURCES = [
    MCPResource(
        uri=DIET_PLANS_URI,
        name="Diet Plans",
        description="Available diet plans and their configurations",
    ),
]


def _ok(request: RPCRequest, result: Any) -> RPCResponse:
    return RPCResponse(id=request.id, result=result)


def _fail(request: RPCRequest, code: int, message: str) -> RPCResponse:
    return RPCResponse(id=request.id, error=RPCError(code=code, message=message))


def _text_content(payload: Any) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": json.dumps(payload, indent=2)}]}


# ---------------------------------------------------------------------------
# Method handlers
# ---------------------------------------------------------------------------


def _initialize(request: RPCRequest, store: RecipeStore, presets: DietPresetTable) -> RPCResponse:
    return _ok(request, {
        "protocolVersion": PROTOCOL_VERSION,
        "capabilities": {
            "tools": {"listChanged": False},
            "resources": {"subscribe": False, "listChanged": False},
        },
        "serverInfo": SERVER_INFO,
    })


def _tools_list(request: RPCRequest, store: RecipeStore, presets: DietPresetTable) -> RPCResponse:
    tools = [tool.model_dump(by_alias=True) for tool in list_tools(presets)]
    return _ok(request, {"tools": tools})


def _tools_call(request: RPCRequest, store: RecipeStore, presets: DietPresetTable) -> RPCResponse:
    params = request.params
    if not isinstance(params, dict):
        return _fail(request, INVALID_PARAMS, "Invalid params")

    name = params.get("name")
    arguments = params.get("arguments")
    if not isinstance(arguments, dict):
        arguments = {}

    try:
        if name == "search_recipes":
            query = parse_tool_arguments(arguments, row_limit=TOOL_ROW_LIMIT)
            response = search_recipes(store, presets, query)
            return _ok(request, _text_content(response.model_dump()))

        if name == "get_recipe":
            recipe_id = to_number(arguments.get("id"), integer=True)
            if recipe_id is None:
                return _fail(request, INVALID_PARAMS, "Invalid recipe ID")
            recipe = get_recipe(store, recipe_id)
            return _ok(request, _text_content(recipe.model_dump()))

        if name == "get_diet_plans":
            return _ok(request, _text_content(list_diet_plans(presets).model_dump()))

    except RecipeNotFoundError as exc:
        return _fail(request, RECIPE_NOT_FOUND, str(exc))
    except StoreUnavailableError as exc:
        return _fail(request, STORE_UNAVAILABLE, str(exc))

    return _fail(request, METHOD_NOT_FOUND, "Tool not found")


def _resources_list(request: RPCRequest, store: RecipeStore, presets: DietPresetTable) -> RPCResponse:
    resources = [resource.model_dump(by_alias=True) for resource in RESOURCES]
    return _ok(request, {"resources": resources})


def _resources_read(request: RPCRequest, store: RecipeStore, presets: DietPresetTable) -> RPCResponse:
    params = request.params
    if not isinstance(params, dict):
        return _fail(request, INVALID_PARAMS, "Invalid params")

    uri = params.get("uri")
    if uri != DIET_PLANS_URI:
        return _fail(request, METHOD_NOT_FOUND, "Resource not found")

    return _ok(request, {
        "contents": [{
            "uri": uri,
            "mimeType": "application/json",
            "text": json.dumps(presets.as_dict(), indent=2),
        }],
    })


_Handler = Callable[[RPCRequest, RecipeStore, DietPresetTable], RPCResponse]

_METHODS: dict[str, _Handler] = {
    "initialize": _initialize,
    "tools/list": _tools_list,
    "tools/call": _tools_call,
    "resources/list": _resources_list,
    "resources/read": _resources_read,
}


def dispatch(request: RPCRequest, store: RecipeStore, presets: DietPresetTable) -> RPCResponse:
    handler = _METHODS.get(request.method)
    if handler is None:
        logger.debug("Unknown JSON-RPC method %r", request.method)
        return _fail(request, METHOD_NOT_FOUND, "Method not found")
    return handler(request, store, presets)
