from __future__ import annotations
from typing import Any, Mapping
from logging import getLogger
from graphql_http.adapters.executor import (
    Executor,
    Resolver,
    build_executable_schema,
    parse_document,
    validate_document,
)
from graphql_http.interfaces.schemas import OperationRequest
from graphql_http.pipeline.extractor import extract_request
from graphql_http.pipeline.formatter import format_result
from graphql_http.pipeline.guard import guard_method
from graphql_http.pipeline.selector import select_operation

logger = getLogger(__name__)


class GraphQLEngine:
    """Runs one GraphQL-over-HTTP request from raw input to response body.

    Built once per application; holds the compiled schema with its resolvers
    bound and nothing request specific, so it is shared by concurrent requests.
    Protocol failures surface as ``ProtocolError`` subclasses.
    """

    executor: Executor

    def __init__(
        self,
        schema: str,
        resolvers: Mapping[str, Resolver] | None = None,
        root_value: Any = None,
    ):
        self.executor = Executor(
            build_executable_schema(schema, resolvers), root_value=root_value
        )

    @property
    def schema(self):
        return self.executor.schema

    async def handle(
        self,
        method: str,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        context: Any = None,
    ) -> tuple[int, dict[str, Any]]:
        operation = extract_request(method, params, body)
        return await self.run(operation, method=method, context=context)

    async def run(
        self, operation: OperationRequest, method: str = "POST", context: Any = None
    ) -> tuple[int, dict[str, Any]]:
        document = parse_document(operation.document_source)
        validate_document(self.schema, document)
        selected = select_operation(document, operation.operation_name)
        guard_method(selected, method)
        logger.debug(
            "executing %s operation name=%s", selected.kind.value, selected.name
        )
        result = await self.executor.execute(
            document,
            operation_name=selected.name,
            variables=operation.variables,
            context=context,
        )
        return format_result(result)

    async def run_query(
        self,
        source: str,
        variables: Mapping[str, Any] | None = None,
        operation_name: str | None = None,
        context: Any = None,
    ) -> dict[str, Any]:
        """Execute ``source`` on behalf of application code and return the body."""
        operation = OperationRequest(
            document_source=source,
            variables=variables,
            operation_name=operation_name,
        )
        _, body = await self.run(operation, context=context)
        return body
