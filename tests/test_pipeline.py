"""
Tests for the request pipeline stages: extraction, selection, method guard
and response formatting.
"""

from json import dumps

import pytest
from graphql import ExecutionResult, GraphQLError, OperationType, parse

from graphql_http.interfaces.errors import (
    AmbiguousOperation,
    DocumentSyntaxError,
    MalformedRequest,
    MutationViaUnsafeMethod,
    UnknownOperationName,
)
from graphql_http.pipeline.extractor import extract_get, extract_post, extract_request
from graphql_http.pipeline.formatter import error_headers, format_error, format_result
from graphql_http.pipeline.guard import guard_method
from graphql_http.pipeline.selector import select_operation

TWO_OPERATIONS = """
    query MyQuery { add(x: 1, y: 2) }
    mutation Save { setMessage(message: "hi") }
"""


# =============================================================================
# Extractor
# =============================================================================


class TestExtractGet:
    def test_query_only(self) -> None:
        operation = extract_get({"query": "{ add(x: 1, y: 1) }"})

        assert operation.document_source == "{ add(x: 1, y: 1) }"
        assert operation.variables == {}
        assert operation.operation_name is None

    def test_decodes_variables(self) -> None:
        operation = extract_get(
            {"query": "{ a }", "variables": dumps({"x": 2, "y": [1, 2]})}
        )

        assert operation.variables == {"x": 2, "y": [1, 2]}

    def test_get_and_post_variables_match(self) -> None:
        variables = {"x": 2, "nested": {"flag": True, "name": None}}

        from_get = extract_get({"query": "{ a }", "variables": dumps(variables)})
        from_post = extract_post({"query": "{ a }", "variables": variables})

        assert from_get.variables == from_post.variables == variables

    def test_operation_name(self) -> None:
        operation = extract_get({"query": "{ a }", "operationName": "Double"})

        assert operation.operation_name == "Double"

    def test_empty_operation_name_is_absent(self) -> None:
        operation = extract_get({"query": "{ a }", "operationName": ""})

        assert operation.operation_name is None

    @pytest.mark.parametrize("params", [{}, {"query": ""}, {"variables": "{}"}])
    def test_missing_query(self, params) -> None:
        with pytest.raises(MalformedRequest):
            extract_get(params)

    def test_variables_invalid_json(self) -> None:
        with pytest.raises(MalformedRequest, match="invalid JSON"):
            extract_get({"query": "{ a }", "variables": "{x: 1"})

    def test_variables_not_an_object(self) -> None:
        with pytest.raises(MalformedRequest, match="variables"):
            extract_get({"query": "{ a }", "variables": "[1, 2]"})


class TestExtractPost:
    def test_full_body(self) -> None:
        operation = extract_post(
            {"query": "{ a }", "variables": {"x": 1}, "operationName": "A"}
        )

        assert operation.document_source == "{ a }"
        assert operation.variables == {"x": 1}
        assert operation.operation_name == "A"

    def test_null_variables(self) -> None:
        assert extract_post({"query": "{ a }", "variables": None}).variables == {}

    def test_absent_variables(self) -> None:
        assert extract_post({"query": "{ a }"}).variables == {}

    @pytest.mark.parametrize("body", [None, [], "query", {"query": None}])
    def test_malformed_body(self, body) -> None:
        with pytest.raises(MalformedRequest):
            extract_post(body)

    def test_query_must_be_a_string(self) -> None:
        with pytest.raises(MalformedRequest, match="query"):
            extract_post({"query": 42})

    def test_encoded_variables_are_rejected(self) -> None:
        with pytest.raises(MalformedRequest, match="variables"):
            extract_post({"query": "{ a }", "variables": '{"x": 1}'})


def test_extract_request_dispatches_on_method() -> None:
    assert extract_request("get", params={"query": "{ a }"}).document_source == "{ a }"
    assert extract_request("POST", body={"query": "{ b }"}).document_source == "{ b }"


# =============================================================================
# Selector
# =============================================================================


class TestSelectOperation:
    def test_single_anonymous(self) -> None:
        selected = select_operation(parse("{ add(x: 1, y: 1) }"))

        assert selected.name is None
        assert selected.kind == OperationType.QUERY

    def test_single_named_without_name(self) -> None:
        selected = select_operation(parse("query Sum { add(x: 1, y: 1) }"))

        assert selected.name == "Sum"

    def test_single_with_matching_name(self) -> None:
        selected = select_operation(parse("query Sum { a }"), "Sum")

        assert selected.name == "Sum"

    def test_single_with_other_name(self) -> None:
        with pytest.raises(UnknownOperationName):
            select_operation(parse("query Sum { a }"), "Other")

    def test_multiple_without_name(self) -> None:
        with pytest.raises(AmbiguousOperation):
            select_operation(parse(TWO_OPERATIONS))

    def test_multiple_by_name(self) -> None:
        selected = select_operation(parse(TWO_OPERATIONS), "Save")

        assert selected.name == "Save"
        assert selected.kind == OperationType.MUTATION

    def test_multiple_unknown_name(self) -> None:
        with pytest.raises(UnknownOperationName, match="Nope"):
            select_operation(parse(TWO_OPERATIONS), "Nope")

    def test_no_operations(self) -> None:
        with pytest.raises(MalformedRequest):
            select_operation(parse("fragment F on Query { a }"))


# =============================================================================
# Method guard
# =============================================================================


class TestGuardMethod:
    @pytest.mark.parametrize("method", ["GET", "POST"])
    def test_query_allowed(self, method) -> None:
        guard_method(select_operation(parse("{ a }")), method)

    def test_mutation_via_post(self) -> None:
        guard_method(select_operation(parse(TWO_OPERATIONS), "Save"), "POST")

    @pytest.mark.parametrize(
        "source", ["mutation { a }", "subscription { a }"]
    )
    def test_unsafe_via_get(self, source) -> None:
        with pytest.raises(MutationViaUnsafeMethod) as e:
            guard_method(select_operation(parse(source)), "get")

        assert e.value.status_code == 405

    def test_only_selected_operation_counts(self) -> None:
        guard_method(select_operation(parse(TWO_OPERATIONS), "MyQuery"), "GET")


# =============================================================================
# Formatter
# =============================================================================


class TestFormatter:
    def test_success_has_no_errors_key(self) -> None:
        assert format_result(ExecutionResult(data={"add": 4})) == (
            200,
            {"data": {"add": 4}},
        )

    def test_partial_success(self) -> None:
        result = ExecutionResult(
            data={"add": None}, errors=[GraphQLError("boom", path=["add"])]
        )

        status, body = format_result(result)

        assert status == 200
        assert body == {
            "data": {"add": None},
            "errors": [{"message": "boom", "path": ["add"]}],
        }

    def test_protocol_errors(self) -> None:
        assert format_error(MalformedRequest("bad")) == (
            400,
            {"errors": [{"message": "bad"}]},
        )
        assert format_error(MutationViaUnsafeMethod("no"))[0] == 405

    def test_syntax_error_keeps_engine_errors(self) -> None:
        engine_error = GraphQLError("Syntax Error: oops")
        error = DocumentSyntaxError(engine_error.message, [engine_error])

        assert format_error(error) == (400, {"errors": [{"message": "Syntax Error: oops"}]})

    def test_allow_header_only_for_method_errors(self) -> None:
        assert error_headers(MutationViaUnsafeMethod("no")) == {"Allow": "POST"}
        assert error_headers(AmbiguousOperation("which")) is None
