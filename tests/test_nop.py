"""
No-op wrapper: routes work, nothing is documented.
"""

from typing import List

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.testclient import TestClient

from routedoc import NopApi, NopGroup, NopRoot, UISetting

from tests.conftest import ok
from tests.test_wrapper import Pet, RateHeaders, Record


class TestNopRoot:

    def test_routes_registered_without_docs(self):
        app = Starlette()
        root = NopRoot(app)
        api = root.get("/ping", ok)
        assert isinstance(api, NopApi)
        assert api.route.path == "/ping"
        assert [r.path for r in app.router.routes] == ["/ping"]
        assert TestClient(app).get("/doc").status_code == 404
        assert TestClient(app).get("/ping").text == "ok"

    def test_full_surface_chains(self):
        root = NopRoot(Starlette())
        assert root.set_request_content_type("a") is root
        assert root.set_response_content_type("a") is root
        assert root.set_external_docs("d", "u") is root
        assert root.add_security_basic("Basic") is root
        assert root.add_security_api_key("JWT", "", "header") is root
        assert root.add_security_oauth2("OAuth2", "", "implicit", "http://auth", "", {"a": "b"}) is root
        assert root.set_ui(UISetting()) is root
        assert root.set_scheme("ftp") is root
        assert root.set_raw(None) is root
        assert root.get_raw() is None

    def test_api_surface_chains(self):
        api = NopRoot(Starlette()).post("/pets/:id", ok)
        assert api.route.path == "/pets/{id}"
        same = api.add_param_path(int, "id") \
            .add_param_path_nested(Pet) \
            .add_param_query(str, "q") \
            .add_param_query_nested(Pet) \
            .add_param_form(str, "f") \
            .add_param_form_nested(Pet) \
            .add_param_header(str, "h") \
            .add_param_header_nested(Pet) \
            .add_param_body(List[Pet], "body") \
            .add_param_body(Pet, "second") \
            .add_param_file("file") \
            .add_response(200, "ok", Pet, RateHeaders) \
            .set_request_content_type("a") \
            .set_response_content_type("b") \
            .set_operation_id("id") \
            .set_deprecated() \
            .set_description("d") \
            .set_external_docs("d", "u") \
            .set_summary("s") \
            .set_security("JWT") \
            .set_security_with_scope({"OAuth2": ["x"]})
        assert same is api

    def test_without_app(self):
        root = NopRoot()
        assert root.app is None
        api = root.get("/ping", ok)
        assert api.route is None
        g = root.group("G", "/g")
        assert g.router is None
        assert g.get("/x", ok).route is None


class TestNopGroup:

    def test_group_routes(self):
        app = Starlette()
        calls = []
        g = NopRoot(app).group("Users", "/users", [Middleware(Record, label="group", calls=calls)])
        assert isinstance(g, NopGroup)
        assert g.set_description("d").set_external_docs("d", "u").set_security("JWT") \
            .set_security_with_scope({"OAuth2": []}) is g
        api = g.get("/:id", ok)
        assert api.route.path == "/users/{id}"
        assert g.router is app.router
        assert TestClient(app).get("/users/1").text == "ok"
        assert calls == ["group"]
