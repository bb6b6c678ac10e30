"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import GraphQLError
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext

from ..config import settings
from ..logging import get_logger
from ..store import UserGraphError, UserStore
from .mutations.root import Mutation
from .queries.root import Query
from .resolvers import MUTATION_RESOLVERS, QUERY_RESOLVERS

logger = get_logger(__name__)


class UserGraphSchema(strawberry.Schema):
    """Schema that logs request-scoped errors through structlog."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        operation = execution_context.operation_name if execution_context else None
        for error in errors:
            original = error.original_error
            if original is None:
                logger.info("GraphQL request rejected", error=error.message, operation=operation)
            elif isinstance(original, UserGraphError):
                logger.info(
                    "GraphQL operation failed",
                    error=error.message,
                    code=original.code,
                    path=error.path,
                    operation=operation,
                )
            else:
                logger.error(
                    "Unexpected error while executing GraphQL operation",
                    error=error.message,
                    path=error.path,
                    operation=operation,
                    exc_info=original,
                )


# Create the GraphQL schema
schema = UserGraphSchema(query=Query, mutation=Mutation)


def check_operation_table() -> None:
    """Ensure the schema's root fields are exactly the ones in the resolver table."""
    graphql_schema = schema._schema
    problems = []

    for kind, root_type, table in (
        ("query", graphql_schema.query_type, QUERY_RESOLVERS),
        ("mutation", graphql_schema.mutation_type, MUTATION_RESOLVERS),
    ):
        declared = set(root_type.fields) if root_type else set()
        missing = sorted(set(table) - declared)
        unbound = sorted(declared - set(table))
        if missing:
            problems.append(f"{kind} resolvers without a schema field: {', '.join(missing)}")
        if unbound:
            problems.append(f"{kind} fields without a resolver: {', '.join(unbound)}")
        for name, resolver in table.items():
            if not callable(resolver):
                problems.append(f"{kind} resolver for {name} is not callable")

    if problems:
        raise RuntimeError(f"GraphQL operation table mismatch: {'; '.join(problems)}")


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Runs graphql-core schema validation, an introspection query and the
    operation table check so a broken schema fails startup instead of
    failing requests.

    Raises:
        RuntimeError: If the schema is invalid or its root fields do not
            match the resolver table
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise RuntimeError(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        from graphql import get_introspection_query, graphql_sync

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise RuntimeError(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        check_operation_table()

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


def create_graphql_router(store: UserStore | None = None) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI.

    Resolvers get the store from the request context: the one given here, or
    ``app.state.store`` of the serving application.
    """

    async def get_context(request: Request) -> dict[str, Any]:
        """Get the context for GraphQL resolvers."""
        return {
            "request": request,
            "store": store if store is not None else request.app.state.store,
        }

    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql" if settings.graphiql else None,
        context_getter=get_context,
    )
