"""
GraphQL client for the usergraph endpoint.

Issues a fixed set of documents over HTTP and returns the ``data`` payloads.
"""

from typing import Any

import httpx

from .logging import get_logger

logger = get_logger(__name__)

ALL_USERS_QUERY = """
query AllUsers {
  allUsers {
    id
    name
  }
}
"""

USER_QUERY = """
query User($id: String!) {
  user(where: { id: $id }) {
    id
    name
  }
}
"""

CREATE_ONE_USER_MUTATION = """
mutation CreateOneUser($data: UserCreateInput!) {
  createOneUser(data: $data) {
    id
    name
  }
}
"""

DELETE_ONE_USER_MUTATION = """
mutation DeleteOneUser($id: String!) {
  deleteOneUser(where: { id: $id }) {
    id
    name
  }
}
"""

BIG_RED_BUTTON_MUTATION = """
mutation BigRedButton {
  bigRedButton
}
"""


class GraphQLClientError(Exception):
    """The endpoint answered with GraphQL errors."""

    def __init__(self, errors: list[dict[str, Any]]):
        self.errors = errors
        messages = "; ".join(str(error.get("message")) for error in errors)
        super().__init__(f"GraphQL request failed: {messages}")


class UserGraphClient:
    """Async client for the user GraphQL endpoint."""

    def __init__(
        self,
        base_url: str = "http://localhost:4000",
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "UserGraphClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
    ) -> dict[str, Any]:
        """POST a document and return its ``data``; raise on GraphQL errors."""
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables
        if operation_name is not None:
            payload["operationName"] = operation_name

        response = await self._client.post("/graphql", json=payload)
        response.raise_for_status()
        body = response.json()

        if body.get("errors"):
            logger.warning("GraphQL request returned errors", errors=body["errors"])
            raise GraphQLClientError(body["errors"])
        return body.get("data") or {}

    async def all_users(self) -> list[dict[str, Any]]:
        data = await self.execute(ALL_USERS_QUERY, operation_name="AllUsers")
        return data["allUsers"]

    async def user(self, id: str) -> dict[str, Any] | None:
        data = await self.execute(USER_QUERY, {"id": id}, operation_name="User")
        return data["user"]

    async def create_user(self, name: str, id: str | None = None) -> dict[str, Any]:
        user_data: dict[str, Any] = {"name": name}
        if id is not None:
            user_data["id"] = id
        data = await self.execute(
            CREATE_ONE_USER_MUTATION, {"data": user_data}, operation_name="CreateOneUser"
        )
        return data["createOneUser"]

    async def delete_user(self, id: str) -> dict[str, Any] | None:
        data = await self.execute(DELETE_ONE_USER_MUTATION, {"id": id}, operation_name="DeleteOneUser")
        return data["deleteOneUser"]

    async def big_red_button(self) -> str:
        data = await self.execute(BIG_RED_BUTTON_MUTATION, operation_name="BigRedButton")
        return data["bigRedButton"]
