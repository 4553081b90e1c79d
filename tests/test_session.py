"""View invalidation, session wiring and the Dash app factory."""

from __future__ import annotations

import pytest

from standarium_erp.app import create_app
from standarium_erp.data_store import COLLECTIONS
from standarium_erp.errors import AuthRequiredError
from standarium_erp.session import ErrorBanner
from standarium_erp.sync_gateway import SIGNED_IN
from standarium_erp.views import ViewRegistry, page_for_path

from tests.conftest import PASSWORD


class TestViewRegistry:
    def test_products_touch_only_dependent_pages(self) -> None:
        views = ViewRegistry()
        assert set(views.invalidate("products")) == {"dashboard", "inventory", "reports"}
        assert views.version("inventory") == 1
        assert views.version("services") == 0
        assert views.version("checklist") == 0

    def test_each_collection_has_its_pages(self) -> None:
        views = ViewRegistry()
        views.invalidate("services")
        views.invalidate("components")
        views.invalidate("sales")
        assert views.version("services") == 1
        assert views.version("checklist") == 1
        assert views.version("dashboard") == 1
        assert views.version("inventory") == 0

    def test_unknown_collection_is_ignored(self) -> None:
        assert ViewRegistry().invalidate("customers") == ()

    def test_invalidate_all(self) -> None:
        views = ViewRegistry()
        views.invalidate_all()
        assert views.version("assistant") == 1

    def test_page_for_path(self) -> None:
        assert page_for_path(None) == "dashboard"
        assert page_for_path("/build") == "checklist"
        assert page_for_path("/nope") == "not-found"


class TestSession:
    def test_sign_in_marks_collections_loaded(self, signed_in) -> None:
        assert signed_in.gateway.state == SIGNED_IN
        assert signed_in.loaded == set(COLLECTIONS)
        assert not signed_in.syncing

    def test_snapshot_bumps_versions(self, signed_in) -> None:
        views = signed_in.views
        before = views.version("inventory"), views.version("services")
        signed_in.gateway.save("products", {"name": "Fone", "cost": 10})
        assert views.version("inventory") == before[0] + 1
        assert views.version("services") == before[1]

    def test_product_lookup(self, signed_in) -> None:
        product_id = signed_in.gateway.save("products", {"name": "Fone"})
        assert signed_in.product(product_id).name == "Fone"
        assert signed_in.product("missing") is None

    def test_close_signs_out(self, signed_in) -> None:
        signed_in.close()
        assert not signed_in.gateway.is_authenticated
        assert signed_in.loaded == set()

    def test_failures_reach_the_banner(self, session) -> None:
        with pytest.raises(AuthRequiredError):
            session.gateway.save("products", {"name": "x"})
        assert session.banner.take() == "Você precisa estar logado para salvar dados."
        assert session.banner.take() is None

    def test_error_banner_keeps_last_message(self) -> None:
        banner = ErrorBanner()
        banner.show("um")
        banner.show("dois")
        assert banner.take() == "dois"


class TestApp:
    def test_health_route(self, session) -> None:
        app = create_app(session)
        client = app.server.test_client()

        data = client.get("/api/health").get_json()
        assert data["backend"] == "local"
        assert data["authenticated"] is False
        assert data["auth_state"] == "signed-out"

        session.gateway.sign_up("health@example.com", PASSWORD)
        session.gateway.save("services", {"name": "Formatação", "price": 80})
        data = client.get("/api/health").get_json()
        assert data["authenticated"] is True
        assert data["counts"]["services"] == 1
        assert data["loaded"] == sorted(COLLECTIONS)

    def test_layout_and_callbacks_registered(self, session) -> None:
        app = create_app(session)
        assert app.title == "Standarium ERP"
        keys = " ".join(app.callback_map)
        for component_id in ("page-content", "inv-table", "svc-table", "comp-list",
                             "report-table", "chat-log", "dash-kpis", "error-banner"):
            assert component_id in keys
