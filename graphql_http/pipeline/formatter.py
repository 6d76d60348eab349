from typing import Any
from graphql import ExecutionResult
from graphql_http.interfaces.errors import ProtocolError, MutationViaUnsafeMethod

INTERNAL_ERROR_BODY = {"errors": [{"message": "Internal Server Error"}]}


def format_result(result: ExecutionResult) -> tuple[int, dict[str, Any]]:
    """Map an executed operation to its response.

    Execution always answers 200, partial failures included; ``errors`` is only
    present when the engine reported some.
    """
    body: dict[str, Any] = {"data": result.data}
    if result.errors:
        body["errors"] = [error.formatted for error in result.errors]
    return 200, body


def format_error(error: ProtocolError) -> tuple[int, dict[str, Any]]:
    return error.status_code, {"errors": error.formatted}


def error_headers(error: ProtocolError) -> dict[str, str] | None:
    if isinstance(error, MutationViaUnsafeMethod):
        return {"Allow": "POST"}
    return None
