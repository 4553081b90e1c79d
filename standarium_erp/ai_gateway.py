"""
ai_gateway.py: client for the hosted text-generation backend.

The backend holds the provider API key; this module never talks to the AI
provider directly. Both calls return the generated text, or None on any
transport error, non-2xx answer or malformed body. Callers show their own
fallback message.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

import httpx

logger = logging.getLogger("standarium.ai")

TEXT_ENDPOINT = "/api/generate-text"
CHAT_ENDPOINT = "/api/generate-chat"

ROLE_USER = "user"
ROLE_MODEL = "model"

BUSY_LABEL = "..."
FALLBACK_MESSAGE = "Desculpe, ocorreu um erro ao contatar a IA. Tente novamente."


def history_entry(role, text):
    """One conversation turn in the backend's wire format."""
    return {"role": role, "parts": [{"text": text}]}


@contextmanager
def busy(control):
    """Disable ``control`` for the duration of a request, restoring it afterwards."""
    if control is None:
        yield
        return
    was_disabled = getattr(control, "disabled", False)
    label = getattr(control, "label", None)
    control.disabled = True
    if label is not None:
        control.label = BUSY_LABEL
    try:
        yield
    finally:
        control.disabled = was_disabled
        if label is not None:
            control.label = label


class AIGateway:
    def __init__(self, base_url: str, timeout: float = 60.0, client: httpx.Client | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def _post(self, endpoint, payload):
        url = self.base_url + endpoint
        try:
            if self._client is not None:
                resp = self._client.post(url, json=payload, timeout=self.timeout)
            else:
                resp = httpx.post(url, json=payload, timeout=self.timeout)
        except httpx.HTTPError as e:
            logger.error("AI backend unreachable at %s: %s", url, e)
            return None

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not resp.is_success:
            error = body.get("error") if isinstance(body, dict) else None
            logger.error("AI backend %s failed (%s): %s", endpoint, resp.status_code,
                         error or resp.reason_phrase)
            return None

        text = body.get("text") if isinstance(body, dict) else None
        if not isinstance(text, str):
            logger.error("AI backend %s returned a malformed body", endpoint)
            return None
        return text

    def generate_text(self, prompt: str, control=None):
        with busy(control):
            return self._post(TEXT_ENDPOINT, {"prompt": prompt})

    def generate_chat(self, history: list[dict], control=None):
        with busy(control):
            return self._post(CHAT_ENDPOINT, {"history": history})


# ── Prompts ─────────────────────────────────────────────────────────────────

def description_prompt(product_name):
    return (
        "Crie uma descrição de venda curta, atraente e profissional para o seguinte "
        f'produto de eletrônicos: "{product_name}". Foque nos benefícios e principais '
        "características em 2 ou 3 parágrafos. Use uma linguagem vendedora, mas honesta."
    )


def insights_prompt(period_label, revenue, profit, sold_count):
    return (
        "Sou dono de uma pequena empresa de revenda de eletrônicos. "
        f'No período de "{period_label}", estes foram meus resultados: '
        f"Faturamento de {revenue}, Lucro de {profit}, e {sold_count} itens vendidos. "
        "Com base nesses números, gere uma análise de negócios concisa para mim. "
        "Destaque pontos positivos, possíveis pontos de atenção e me dê 3 sugestões "
        "práticas e acionáveis para melhorar meus resultados no próximo período. "
        "Seja direto e use um tom de consultor de negócios. Formate a resposta em "
        "markdown, usando títulos com ** para negrito."
    )
