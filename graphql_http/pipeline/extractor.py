from __future__ import annotations
from typing import Any, Mapping
from json import loads, JSONDecodeError
from pydantic import ValidationError
from graphql_http.interfaces.errors import MalformedRequest
from graphql_http.interfaces.schemas import GraphQLRequest, OperationRequest


def extract_request(
    method: str, params: Mapping[str, str] | None = None, body: Any = None
) -> OperationRequest:
    if method.upper() == "GET":
        return extract_get(params or {})
    return extract_post(body)


def extract_get(params: Mapping[str, str]) -> OperationRequest:
    """Build an operation request from query-string parameters.

    ``variables`` travels JSON-encoded on GET and is decoded here.
    """
    if not params.get("query"):
        raise MalformedRequest("Must provide query string.")
    fields: dict[str, Any] = {
        "query": params["query"],
        "operationName": params.get("operationName"),
    }
    raw_variables = params.get("variables")
    if raw_variables:
        try:
            fields["variables"] = loads(raw_variables)
        except JSONDecodeError as e:
            raise MalformedRequest("Variables are invalid JSON.") from e
    return _to_operation(fields)


def extract_post(body: Any) -> OperationRequest:
    if not isinstance(body, dict):
        raise MalformedRequest("POST body must be a JSON object.")
    if not body.get("query"):
        raise MalformedRequest("Must provide query string.")
    return _to_operation(body)


def _to_operation(fields: Mapping[str, Any]) -> OperationRequest:
    try:
        request = GraphQLRequest.model_validate(fields)
    except ValidationError as e:
        detail = e.errors()[0]
        location = ".".join(str(part) for part in detail["loc"])
        raise MalformedRequest(f"Invalid '{location}': {detail['msg']}.") from e
    return OperationRequest(
        document_source=request.query,
        variables=request.variables,
        operation_name=request.operationName,
    )
