from graphql import OperationType
from graphql_http.pipeline.selector import SelectedOperation
from graphql_http.interfaces.errors import MutationViaUnsafeMethod

# Only queries are safe to run from a GET
SAFE_METHODS = {"GET", "HEAD"}


def guard_method(selected: SelectedOperation, method: str) -> None:
    if method.upper() in SAFE_METHODS and selected.kind != OperationType.QUERY:
        raise MutationViaUnsafeMethod(
            f"Can only perform a {selected.kind.value} operation from a POST request."
        )
