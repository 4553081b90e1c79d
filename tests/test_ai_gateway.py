"""AIGateway over httpx.MockTransport."""

from __future__ import annotations

import json
import logging

import httpx

from standarium_erp.ai_gateway import (
    BUSY_LABEL,
    ROLE_MODEL,
    ROLE_USER,
    busy,
    description_prompt,
    history_entry,
)

from tests.conftest import make_ai


class Button:
    def __init__(self) -> None:
        self.disabled = False
        self.label = "Gerar"
        self.seen = None


class TestAIGateway:
    def test_generate_text_posts_prompt(self) -> None:
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"text": "Descrição pronta"})

        ai = make_ai(handler)
        assert ai.generate_text(description_prompt("Fone")) == "Descrição pronta"
        (req,) = requests
        assert req.url.path == "/api/generate-text"
        assert "Fone" in json.loads(req.content)["prompt"]

    def test_generate_chat_sends_history(self) -> None:
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"text": "Olá"})

        history = [history_entry(ROLE_USER, "Oi"), history_entry(ROLE_MODEL, "Olá!"),
                   history_entry(ROLE_USER, "Qual preço?")]
        assert make_ai(handler).generate_chat(history) == "Olá"
        assert bodies == [{"history": history}]
        assert history[0] == {"role": "user", "parts": [{"text": "Oi"}]}

    def test_error_status_returns_none(self, caplog) -> None:
        ai = make_ai(lambda r: httpx.Response(500, json={"error": "quota exceeded"}))
        with caplog.at_level(logging.ERROR, logger="standarium.ai"):
            assert ai.generate_text("x") is None
        assert "quota exceeded" in caplog.text

    def test_malformed_body_returns_none(self) -> None:
        assert make_ai(lambda r: httpx.Response(200, json={"answer": "x"})).generate_text("x") is None
        assert make_ai(lambda r: httpx.Response(200, text="not json")).generate_text("x") is None

    def test_transport_error_returns_none(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        assert make_ai(handler).generate_chat([]) is None

    def test_control_is_disabled_during_request_and_restored(self) -> None:
        button = Button()

        def handler(request: httpx.Request) -> httpx.Response:
            button.seen = (button.disabled, button.label)
            return httpx.Response(503)

        assert make_ai(handler).generate_text("x", control=button) is None
        assert button.seen == (True, BUSY_LABEL)
        assert (button.disabled, button.label) == (False, "Gerar")

    def test_busy_without_control(self) -> None:
        with busy(None):
            pass
