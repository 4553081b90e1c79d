"""Shared fixtures: in-memory local backend, wired session, sample records."""

from __future__ import annotations

from datetime import date

import httpx
import pytest

from standarium_erp.ai_gateway import AIGateway
from standarium_erp.config import Settings
from standarium_erp.local_store import LocalStore
from standarium_erp.models import Component, Product, Service
from standarium_erp.session import build_session

EMAIL = "loja@example.com"
PASSWORD = "segredo123"


def make_ai(handler) -> AIGateway:
    """AIGateway whose HTTP traffic goes to ``handler(request) -> httpx.Response``."""
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return AIGateway("http://ai.test", timeout=5, client=client)


@pytest.fixture()
def backend() -> LocalStore:
    return LocalStore()


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(data_dir=str(tmp_path))


@pytest.fixture()
def session(settings, backend):
    ai = make_ai(lambda request: httpx.Response(200, json={"text": "ok"}))
    return build_session(settings, backend=backend, ai=ai)


@pytest.fixture()
def signed_in(session):
    """Session with a fresh account signed in."""
    session.gateway.sign_up(EMAIL, PASSWORD)
    return session


@pytest.fixture()
def products() -> list[Product]:
    return [
        Product(id="p1", name="Fone Bluetooth", cost=50.0, quantity=1, suggested_price=90.0,
                purchase_date=date(2024, 3, 2), status="sold", sale_value=100.0,
                sale_date=date(2024, 3, 20), sale_method="Pix"),
        Product(id="p2", name="Carregador", cost=30.0, quantity=3, suggested_price=20.0,
                purchase_date=date(2024, 4, 5), status="in-stock"),
        Product(id="p3", name="Cabo USB-C", cost=10.0, quantity=1, suggested_price=25.0,
                purchase_date=None, status="in-transit"),
        Product(id="p4", name="Papel Térmico", kind="consumption", cost=15.0,
                purchase_date=date(2024, 4, 1), status="not-applicable"),
        Product(id="p5", name="Smartwatch", cost=200.0, quantity=1, suggested_price=320.0,
                purchase_date=date(2024, 1, 15), status="sold", sale_value=180.0,
                sale_date=date(2024, 4, 10), sale_method="Cartão"),
    ]


@pytest.fixture()
def services() -> list[Service]:
    return [
        Service(id="s1", name="troca de tela", price=150.0),
        Service(id="s2", name="Formatação", price=80.0),
        Service(id="s3", name="Bateria", price=120.0),
    ]


@pytest.fixture()
def components() -> list[Component]:
    return [
        Component(id="c1", name="Placa", cost=10.0),
        Component(id="c2", name="Gabinete", cost=20.0),
        Component(id="c3", name="Fonte", cost=99.0),
    ]
