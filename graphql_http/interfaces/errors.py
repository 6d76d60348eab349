from __future__ import annotations
from typing import Any, Sequence
from graphql import GraphQLError


class ProtocolError(Exception):
    """A request that never reached execution.

    Carries the HTTP status it maps to and the GraphQL-formatted errors that
    make up the response body.
    """

    status_code: int = 400

    def __init__(self, message: str, errors: Sequence[GraphQLError] | None = None):
        super().__init__(message)
        self.message = message
        self.errors: list[GraphQLError] = (
            list(errors) if errors else [GraphQLError(message)]
        )

    @property
    def formatted(self) -> list[dict[str, Any]]:
        return [error.formatted for error in self.errors]


class MalformedRequest(ProtocolError):
    pass


class DocumentSyntaxError(ProtocolError):
    pass


class DocumentValidationError(DocumentSyntaxError):
    pass


class AmbiguousOperation(ProtocolError):
    pass


class UnknownOperationName(ProtocolError):
    pass


class MutationViaUnsafeMethod(ProtocolError):
    status_code = 405


class ResolverBindingError(ValueError):
    """Raised at registration when a resolver cannot be bound to the schema."""
