"""
Swagger Petstore on Starlette, documented with routedoc.

Run with::

    python examples/petstore.py

then open http://127.0.0.1:1323/doc
"""

import datetime
from dataclasses import dataclass
from typing import Dict, List

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse

from routedoc import (
    OAUTH2_FLOW_IMPLICIT,
    SECURITY_IN_HEADER,
    Contact,
    Info,
    Int32,
    Int64,
    License,
    Root,
    UISetting,
    tag,
)


# ============================================================================
# Models
# ============================================================================

@dataclass
class Category:
    id: Int64 = tag(json="id", default=0)
    name: str = tag(json="name", default="")


@dataclass
class PetTag:
    id: Int64 = tag(json="id", default=0)
    name: str = tag(json="name", default="")


@dataclass
class Pet:
    id: Int64 = tag(json="id", default=0)
    category: Category = tag(json="category", default_factory=Category)
    name: str = tag(json="name", swagger="required", default="")
    photo_urls: List[str] = tag(json="photoUrls", xml="photoUrl", swagger="required", default_factory=list)
    tags: List[PetTag] = tag(json="tags", xml="tag", default_factory=list)
    status: str = tag(
        json="status",
        swagger="enum(available|pending|sold),desc(pet status in the store)",
        default="",
    )


@dataclass
class StatusParam:
    status: List[str] = tag(
        query="status",
        swagger="required,desc(Status values that need to be considered for filter),"
                "default(available),enum(available|pending|sold)",
        default_factory=list,
    )


@dataclass
class ApiResponse:
    code: Int32 = tag(json="code", default=0)
    type: str = tag(json="type", default="")
    message: str = tag(json="message", default="")


@dataclass
class Order:
    id: Int64 = tag(json="id", default=0)
    pet_id: Int64 = tag(json="petId", default=0)
    quantity: Int64 = tag(json="quantity", default=0)
    ship_date: datetime.datetime = tag(json="shipDate", default=None)
    status: str = tag(json="status", swagger="desc(Order Status),enum(placed|approved|delivered)", default="")
    complete: bool = tag(json="complete", swagger="default(false)", default=False)


@dataclass
class GetOrderId:
    orderId: Int64 = tag(swagger="max(10.0),min(1.0),desc(ID of pet that needs to be fetched)", default=0)


@dataclass
class DeleteOrderId:
    orderId: Int64 = tag(swagger="min(1.0),desc(ID of the order that needs to be deleted)", default=0)


@dataclass
class User:
    id: Int64 = tag(json="id", default=0)
    username: str = tag(json="username", default="")
    first_name: str = tag(json="firstname", default="")
    last_name: str = tag(json="lastname", default="")
    email: str = tag(json="email", default="")
    password: str = tag(json="password", default="")
    phone: str = tag(json="phone", default="")
    user_status: Int32 = tag(json="userStatus", swagger="desc(User Status)", default=0)


@dataclass
class LoginHeader:
    rate_limit: Int32 = tag(json="X-Rate-Limit", swagger="desc(calls per hour allowed by the user)", default=0)
    expires_after: datetime.datetime = tag(
        json="X-Expires-After", swagger="desc(date in UTC when token expires)", default=None,
    )


# ============================================================================
# Handlers
# ============================================================================

PETS: Dict[int, Pet] = {}


async def create_pet(request: Request):
    data = await request.json()
    pet = Pet(id=int(data.get("id", len(PETS) + 1)), name=data.get("name", ""), status=data.get("status", ""))
    PETS[pet.id] = pet
    return JSONResponse({"id": pet.id, "name": pet.name, "status": pet.status})


async def get_pet(request: Request):
    pet = PETS.get(request.path_params["petId"])
    if pet is None:
        return PlainTextResponse("Pet not found", status_code=404)
    return JSONResponse({"id": pet.id, "name": pet.name, "status": pet.status})


async def delete_pet(request: Request):
    if PETS.pop(request.path_params["petId"], None) is None:
        return PlainTextResponse("Pet not found", status_code=404)
    return PlainTextResponse("", status_code=204)


async def not_implemented(request: Request):
    return PlainTextResponse("Not Implemented", status_code=501)


# ============================================================================
# Routes
# ============================================================================

def init_pet(root: Root) -> None:
    g = root.group("pet", "/pet") \
        .set_description("Everything about your Pets") \
        .set_external_docs("Find out more", "http://swagger.io")

    security = {"petstore_auth": ["write:pets", "read:pets"]}
    pet = Pet(name="doggie")

    g.post("", create_pet) \
        .add_param_body(pet, "body", "Pet object that needs to be added to the store", True) \
        .add_response(405, "Invalid input") \
        .set_request_content_type("application/json", "application/xml") \
        .set_operation_id("addPet") \
        .set_summary("Add a new pet to the store") \
        .set_security_with_scope(security)

    g.put("", not_implemented) \
        .add_param_body(pet, "body", "Pet object that needs to be added to the store", True) \
        .add_response(400, "Invalid ID supplied") \
        .add_response(404, "Pet not found") \
        .add_response(405, "Validation exception") \
        .set_request_content_type("application/json", "application/xml") \
        .set_operation_id("updatePet") \
        .set_summary("Update an existing pet") \
        .set_security_with_scope(security)

    g.get("/findByStatus", not_implemented) \
        .add_param_query_nested(StatusParam) \
        .add_response(200, "successful operation", [pet]) \
        .add_response(400, "Invalid status value") \
        .set_operation_id("findPetsByStatus") \
        .set_description("Multiple status values can be provided with comma separated strings") \
        .set_summary("Finds Pets by status") \
        .set_security_with_scope(security)

    g.get("/findByTags", not_implemented) \
        .add_param_query(List[str], "tags", "Tags to filter by", True) \
        .add_response(200, "successful operation", [pet]) \
        .add_response(400, "Invalid tag value") \
        .set_operation_id("findPetsByTags") \
        .set_deprecated() \
        .set_description("Multiple tags can be provided with comma separated strings.") \
        .set_summary("Finds Pets by tags") \
        .set_security_with_scope(security)

    g.get("/{petId:int}", get_pet) \
        .add_param_path(Int64, "petId", "ID of pet to return") \
        .add_response(200, "successful operation", pet) \
        .add_response(400, "Invalid ID supplied") \
        .add_response(404, "Pet not found") \
        .set_operation_id("getPetById") \
        .set_description("Returns a single pet") \
        .set_summary("Find pet by ID") \
        .set_security("api_key")

    g.post("/{petId:int}", not_implemented) \
        .add_param_path(Int64, "petId", "ID of pet that needs to be updated") \
        .add_param_form(str, "name", "Updated name of the pet") \
        .add_param_form(str, "status", "Updated status of the pet") \
        .add_response(405, "Invalid input") \
        .set_request_content_type("application/x-www-form-urlencoded") \
        .set_operation_id("updatePetWithForm") \
        .set_summary("Updates a pet in the store with form data") \
        .set_security_with_scope(security)

    g.delete("/{petId:int}", delete_pet) \
        .add_param_header(str, "api_key") \
        .add_param_path(Int64, "petId", "Pet id to delete") \
        .add_response(400, "Invalid ID supplied") \
        .add_response(404, "Pet not found") \
        .set_operation_id("deletePet") \
        .set_summary("Deletes a pet") \
        .set_security_with_scope(security)

    g.post("/{petId:int}/uploadImage", not_implemented) \
        .add_param_path(Int64, "petId", "ID of pet to update") \
        .add_param_form(str, "additionalMetadata", "Additional data to pass to server") \
        .add_param_file("file", "file to upload") \
        .add_response(200, "successful operation", ApiResponse) \
        .set_request_content_type("multipart/form-data") \
        .set_response_content_type("application/json") \
        .set_operation_id("uploadFile") \
        .set_summary("uploads an image") \
        .set_security_with_scope(security)


def init_store(root: Root) -> None:
    g = root.group("store", "/store").set_description("Access to Petstore orders")

    g.get("/inventory", not_implemented) \
        .add_response(200, "successful operation", Dict[str, Int32]) \
        .set_response_content_type("application/json") \
        .set_operation_id("getInventory") \
        .set_description("Returns a map of status codes to quantities") \
        .set_summary("Returns pet inventories by status") \
        .set_security("api_key")

    g.post("/order", not_implemented) \
        .add_param_body(Order, "body", "order placed for purchasing the pet", True) \
        .add_response(200, "successful operation", Order) \
        .add_response(400, "Invalid Order") \
        .set_operation_id("placeOrder") \
        .set_summary("Place an order for a pet")

    g.get("/order/{orderId}", not_implemented) \
        .add_param_path_nested(GetOrderId) \
        .add_response(200, "successful operation", Order) \
        .add_response(400, "Invalid ID supplied") \
        .add_response(404, "Order not found") \
        .set_operation_id("getOrderById") \
        .set_summary("Find purchase order by ID")

    g.delete("/order/{orderId}", not_implemented) \
        .add_param_path_nested(DeleteOrderId) \
        .add_response(400, "Invalid ID supplied") \
        .add_response(404, "Order not found") \
        .set_operation_id("deleteOrder") \
        .set_summary("Delete purchase order by ID")


def init_user(root: Root) -> None:
    g = root.group("user", "/user") \
        .set_description("Operations about user") \
        .set_external_docs("Find out more about our store", "http://swagger.io")

    g.post("", not_implemented) \
        .add_param_body(User, "body", "Created user object", True) \
        .set_operation_id("createUser") \
        .set_description("This can only be done by the logged in user.") \
        .set_summary("Create user")

    g.post("/createWithArray", not_implemented) \
        .add_param_body(List[User], "body", "List of user object", True) \
        .set_operation_id("createUsersWithArrayInput") \
        .set_request_content_type("application/json", "application/xml") \
        .set_summary("Creates list of users with given input array")

    g.get("/login", not_implemented) \
        .add_param_query(str, "username", "The user name for login", True) \
        .add_param_query(str, "password", "The password for login in clear text", True) \
        .add_response(200, "successful operation", str, LoginHeader) \
        .add_response(400, "Invalid username/password supplied") \
        .set_operation_id("loginUser") \
        .set_summary("Logs user into the system")

    g.get("/logout", not_implemented) \
        .set_operation_id("logoutUser") \
        .set_summary("Logs out current logged in user session")

    g.get("/{username}", not_implemented) \
        .add_param_path(str, "username", "The name that needs to be fetched. Use user1 for testing.") \
        .add_response(200, "successful operation", User) \
        .add_response(400, "Invalid username supplied") \
        .add_response(404, "User not found") \
        .set_operation_id("getUserByName") \
        .set_summary("Get user by user name")

    g.delete("/{username}", not_implemented) \
        .add_param_path(str, "username", "The name that needs to be deleted") \
        .add_response(400, "Invalid username supplied") \
        .add_response(404, "User not found") \
        .set_operation_id("deleteUser") \
        .set_summary("Delete user")


def create_app() -> Starlette:
    app = Starlette()
    root = Root(app, "/doc", Info(
        title="Swagger Petstore",
        description="This is a sample server Petstore server.",
        version="1.0.0",
        terms_of_service="http://swagger.io/terms/",
        contact=Contact(email="apiteam@swagger.io"),
        license=License(name="Apache 2.0", url="http://www.apache.org/licenses/LICENSE-2.0.html"),
    ))

    root.add_security_oauth2(
        "petstore_auth", "", OAUTH2_FLOW_IMPLICIT,
        "http://petstore.swagger.io/oauth/dialog", "",
        {"write:pets": "modify pets in your account", "read:pets": "read your pets"},
    ).add_security_api_key("api_key", "", SECURITY_IN_HEADER)

    root.set_external_docs("Find out more about Swagger", "http://swagger.io") \
        .set_response_content_type("application/xml", "application/json") \
        .set_ui(UISetting(hide_top=True))

    init_pet(root)
    init_store(root)
    init_user(root)

    app.state.docs = root
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=1323)
