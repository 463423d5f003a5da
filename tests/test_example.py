"""
The petstore example end to end.
"""

import importlib.util
import sys
from pathlib import Path

import pytest
from starlette.testclient import TestClient

EXAMPLE = Path(__file__).resolve().parent.parent / "examples" / "petstore.py"


@pytest.fixture(scope="module")
def petstore():
    spec = importlib.util.spec_from_file_location("routedoc_petstore_example", EXAMPLE)
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    yield module
    sys.modules.pop(spec.name, None)


@pytest.fixture
def client(petstore):
    return TestClient(petstore.create_app())


@pytest.fixture
def document(client):
    response = client.get("/doc/swagger.json")
    assert response.status_code == 200
    return response.json()


# ============================================================================
# Document
# ============================================================================

class TestPetstoreDocument:

    def test_header(self, document):
        assert document["swagger"] == "2.0"
        assert document["info"]["title"] == "Swagger Petstore"
        assert document["info"]["license"]["name"] == "Apache 2.0"
        assert document["host"] == "testserver"
        assert "basePath" not in document
        assert document["produces"] == ["application/xml", "application/json"]
        assert [t["name"] for t in document["tags"]] == ["pet", "store", "user"]

    def test_paths(self, document):
        assert set(document["paths"]) == {
            "/pet", "/pet/findByStatus", "/pet/findByTags", "/pet/{petId}", "/pet/{petId}/uploadImage",
            "/store/inventory", "/store/order", "/store/order/{orderId}",
            "/user", "/user/createWithArray", "/user/login", "/user/logout", "/user/{username}",
        }
        assert set(document["paths"]["/pet/{petId}"]) == {"get", "post", "delete"}

    def test_definitions(self, document):
        definitions = document["definitions"]
        assert set(definitions) == {"Pet", "Category", "PetTag", "ApiResponse", "Order", "User"}
        pet = definitions["Pet"]
        assert pet["required"] == ["name", "photoUrls"]
        assert pet["properties"]["name"]["example"] == "doggie"
        assert pet["properties"]["category"] == {"$ref": "#/definitions/Category"}
        assert pet["properties"]["status"]["enum"] == ["available", "pending", "sold"]
        assert pet["properties"]["photoUrls"]["xml"] == {"name": "photoUrl"}
        assert definitions["Order"]["properties"]["shipDate"]["format"] == "date-time"

    def test_security(self, document):
        assert set(document["securityDefinitions"]) == {"petstore_auth", "api_key"}
        assert document["securityDefinitions"]["api_key"] == {"type": "apiKey", "name": "api_key", "in": "header"}
        get_pet = document["paths"]["/pet/{petId}"]["get"]
        assert get_pet["security"] == [{"api_key": []}]
        add_pet = document["paths"]["/pet"]["post"]
        assert add_pet["security"] == [{"petstore_auth": ["write:pets", "read:pets"]}]
        assert "security" not in document["paths"]["/store/order"]["post"]

    def test_parameters(self, document):
        get_pet = document["paths"]["/pet/{petId}"]["get"]
        assert get_pet["parameters"] == [{
            "name": "petId", "in": "path", "description": "ID of pet to return",
            "required": True, "type": "integer", "format": "int64",
        }]
        (status,) = document["paths"]["/pet/findByStatus"]["get"]["parameters"]
        assert status["required"] is True
        assert status["collectionFormat"] == "multi"
        assert status["items"]["enum"] == ["available", "pending", "sold"]
        assert status["items"]["default"] == "available"
        (order_id,) = document["paths"]["/store/order/{orderId}"]["get"]["parameters"]
        assert (order_id["minimum"], order_id["maximum"]) == (1, 10)
        upload = document["paths"]["/pet/{petId}/uploadImage"]["post"]["parameters"]
        assert upload[-1]["type"] == "file"

    def test_responses(self, document):
        login = document["paths"]["/user/login"]["get"]["responses"]
        assert set(login["200"]["headers"]) == {"X-Rate-Limit", "X-Expires-After"}
        assert login["200"]["schema"] == {"type": "string", "format": "string"}
        logout = document["paths"]["/user/logout"]["get"]["responses"]
        assert logout == {"default": {"description": "successful operation"}}
        inventory = document["paths"]["/store/inventory"]["get"]["responses"]["200"]["schema"]
        assert inventory["additionalProperties"]["format"] == "int32"

    def test_ui(self, client):
        response = client.get("/doc")
        assert response.status_code == 200
        assert "Swagger Petstore" in response.text


# ============================================================================
# Handlers
# ============================================================================

class TestPetstoreHandlers:

    def test_pet_lifecycle(self, client):
        assert client.post("/pet", json={"id": 4242, "name": "rex"}).json()["name"] == "rex"
        assert client.get("/pet/4242").json() == {"id": 4242, "name": "rex", "status": ""}
        assert client.delete("/pet/4242").status_code == 204
        assert client.get("/pet/4242").status_code == 404

    def test_not_implemented(self, client):
        assert client.get("/store/inventory").status_code == 501
