from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from .chat.intent import handle_chat
from .chat.models import ChatRequest, ChatResponse
from .errors import RecipeNotFoundError, StoreUnavailableError, TranslatorError
from .filters.adapters import Translator, parse_query_params
from .filters.models import INT64_MAX, INT64_MIN, SEARCH_ROW_LIMIT
from .filters.presets import DietPresetTable, get_diet_presets
from .llm.groq_client import get_translator
from .mcp.dispatch import dispatch
from .mcp.models import PARSE_ERROR, RPCError, RPCRequest, RPCResponse
from .recipes.models import DietPlansResponse, Recipe, SearchResponse
from .recipes.service import get_recipe, list_diet_plans, search_recipes
from .recipes.store import RecipeStore, get_store

logger = logging.getLogger(__name__)

app = FastAPI(title="Recipe Catalog API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# ── REST endpoints ───────────────────────────────────────────────────────


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "healthy"}


@app.get("/api/recipes/search", response_model=SearchResponse)
def recipes_search(
    request: Request,
    store: RecipeStore = Depends(get_store),
    presets: DietPresetTable = Depends(get_diet_presets),
) -> SearchResponse:
    query = parse_query_params(dict(request.query_params), row_limit=SEARCH_ROW_LIMIT)
    try:
        return search_recipes(store, presets, query)
    except StoreUnavailableError as exc:
        raise HTTPException(status_code=503, detail=exc.to_detail())


@app.get("/api/recipe/{recipe_id}", response_model=Recipe)
def recipe_by_id(
    recipe_id: str,
    store: RecipeStore = Depends(get_store),
) -> Recipe:
    try:
        parsed_id = int(recipe_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid recipe ID")
    if not INT64_MIN <= parsed_id <= INT64_MAX:
        raise HTTPException(status_code=400, detail="Invalid recipe ID")

    try:
        return get_recipe(store, parsed_id)
    except RecipeNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.to_detail())
    except StoreUnavailableError as exc:
        raise HTTPException(status_code=503, detail=exc.to_detail())


@app.get("/api/diet-plans", response_model=DietPlansResponse)
def diet_plans(presets: DietPresetTable = Depends(get_diet_presets)) -> DietPlansResponse:
    return list_diet_plans(presets)


# ── Chat endpoint ────────────────────────────────────────────────────────


@app.post("/api/chat", response_model=ChatResponse)
def chat(
    body: ChatRequest,
    translator: Translator = Depends(get_translator),
    store: RecipeStore = Depends(get_store),
    presets: DietPresetTable = Depends(get_diet_presets),
) -> ChatResponse:
    try:
        return handle_chat(body, translator, store, presets)
    except TranslatorError as exc:
        raise HTTPException(status_code=502, detail=exc.to_detail())
    except StoreUnavailableError as exc:
        raise HTTPException(status_code=503, detail=exc.to_detail())


# ── MCP endpoint ─────────────────────────────────────────────────────────


@app.post("/mcp")
async def mcp(
    request: Request,
    store: RecipeStore = Depends(get_store),
    presets: DietPresetTable = Depends(get_diet_presets),
) -> JSONResponse:
    try:
        body = await request.json()
        rpc_request = RPCRequest.model_validate(body)
    except (ValueError, ValidationError):
        logger.debug("Rejected malformed JSON-RPC envelope", exc_info=True)
        error = RPCResponse(error=RPCError(code=PARSE_ERROR, message="Parse error"))
        return JSONResponse(status_code=400, content=error.to_payload())

    response = await run_in_threadpool(dispatch, rpc_request, store, presets)
    return JSONResponse(content=response.to_payload())
