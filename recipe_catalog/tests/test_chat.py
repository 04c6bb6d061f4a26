from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from recipe_catalog.app import app
from recipe_catalog.chat.intent import handle_chat
from recipe_catalog.chat.models import ChatRequest
from recipe_catalog.errors import TranslatorError
from recipe_catalog.filters.presets import DEFAULT_DIET_PRESETS
from recipe_catalog.llm.config import LLMConfig
from recipe_catalog.llm.groq_client import GroqTranslator, get_translator


class FakeTranslator:
    def __init__(self, reply: str | None = None, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[str] = []

    def translate(self, text: str) -> str:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def chat_client(client):
    def _with(translator):
        app.dependency_overrides[get_translator] = lambda: translator
        return client

    return _with


# ── Intent handling ──────────────────────────────────────────────────────


class TestHandleChat:
    def test_translation_only(self, store):
        translator = FakeTranslator("diet=vegan&include_ingredients=tofu")
        resp = handle_chat(ChatRequest(message="vegan tofu please"), translator, store, DEFAULT_DIET_PRESETS)
        assert resp.query_string == "diet=vegan&include_ingredients=tofu"
        assert resp.diet == "vegan"
        assert resp.filters == {"include_ingredients": ["tofu"]}
        assert resp.results is None
        assert "Vegan Diet" in resp.message

    def test_execute_runs_search(self, store):
        translator = FakeTranslator("diet=vegan&include_ingredients=tofu")
        body = ChatRequest(message="vegan tofu please", execute=True)
        resp = handle_chat(body, translator, store, DEFAULT_DIET_PRESETS)
        assert resp.results is not None
        assert resp.results.count == 1
        assert resp.results.recipes[0].name == "Tofu Stir Fry"
        assert resp.message == "Found 1 Vegan Diet recipes for you:"

    def test_execute_with_no_matches(self, store):
        translator = FakeTranslator("search=pavlova")
        body = ChatRequest(message="pavlova", execute=True)
        resp = handle_chat(body, translator, store, DEFAULT_DIET_PRESETS)
        assert resp.results.count == 0
        assert resp.diet is None
        assert "couldn't find" in resp.message

    def test_unknown_diet_from_translator_is_ignored(self, store):
        translator = FakeTranslator("diet=carnivore&max_carbs=10")
        body = ChatRequest(message="meat only", execute=True)
        resp = handle_chat(body, translator, store, DEFAULT_DIET_PRESETS)
        assert resp.diet is None
        assert [r.id for r in resp.results.recipes] == [2, 3]

    def test_translator_failure_propagates(self, store):
        translator = FakeTranslator(error=TimeoutError("slow model"))
        with pytest.raises(TranslatorError):
            handle_chat(ChatRequest(message="anything"), translator, store, DEFAULT_DIET_PRESETS)
        assert len(translator.calls) == 1


# ── Chat endpoint ────────────────────────────────────────────────────────


class TestChatEndpoint:
    def test_translation_only(self, chat_client):
        c = chat_client(FakeTranslator("max_calories=400&sort_by=calories"))
        resp = c.post("/api/chat", json={"message": "light meals"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["query_string"] == "max_calories=400&sort_by=calories"
        assert body["filters"] == {"max_calories": 400, "sort_by": "calories", "sort_order": "asc"}
        assert body["results"] is None

    def test_execute_returns_results(self, chat_client):
        c = chat_client(FakeTranslator("max_calories=400&sort_by=calories"))
        resp = c.post("/api/chat", json={"message": "light meals", "execute": True})
        body = resp.json()
        assert [r["id"] for r in body["results"]["recipes"]] == [4, 1, 3]

    def test_translator_failure_is_bad_gateway(self, chat_client):
        c = chat_client(FakeTranslator(error=ConnectionError("down")))
        resp = c.post("/api/chat", json={"message": "anything"})
        assert resp.status_code == 502
        assert resp.json()["detail"]["error"] == "translator_failure"

    def test_unusable_translation_is_bad_gateway(self, chat_client):
        c = chat_client(FakeTranslator("Sorry, I can only help with recipes."))
        resp = c.post("/api/chat", json={"message": "what's the weather"})
        assert resp.status_code == 502

    def test_empty_message_rejected(self, chat_client):
        translator = FakeTranslator("diet=keto")
        c = chat_client(translator)
        resp = c.post("/api/chat", json={"message": ""})
        assert resp.status_code == 422
        assert translator.calls == []

    @patch("recipe_catalog.llm.groq_client.Groq")
    def test_groq_backed_translation(self, mock_groq_cls, chat_client):
        mock_response = MagicMock()
        mock_response.choices = [MagicMock()]
        mock_response.choices[0].message.content = "`diet=keto`"
        mock_groq_cls.return_value.chat.completions.create.return_value = mock_response

        c = chat_client(GroqTranslator(LLMConfig(api_key="test-key")))
        resp = c.post("/api/chat", json={"message": "keto dinner", "execute": True})
        assert resp.status_code == 200
        body = resp.json()
        assert body["diet"] == "keto"
        assert [r["id"] for r in body["results"]["recipes"]] == [2, 3]

    def test_unconfigured_groq_is_bad_gateway(self, chat_client):
        c = chat_client(GroqTranslator(LLMConfig(api_key="", enabled=True)))
        resp = c.post("/api/chat", json={"message": "keto dinner"})
        assert resp.status_code == 502
