from __future__ import annotations
from typing import Any, Callable, Mapping
from inspect import isawaitable, signature
from logging import getLogger
from graphql import (
    DocumentNode,
    ExecutionResult,
    GraphQLError,
    GraphQLObjectType,
    GraphQLSchema,
    assert_valid_schema,
    build_schema,
    execute,
    parse,
    validate,
)
from graphql_http.interfaces.errors import (
    DocumentSyntaxError,
    DocumentValidationError,
    ResolverBindingError,
)

logger = getLogger(__name__)

Resolver = Callable[[dict[str, Any], Any], Any]


# -------------------------------------------------------------------------------------------
# SCHEMA
# -------------------------------------------------------------------------------------------
def build_executable_schema(
    sdl: str, resolvers: Mapping[str, Resolver] | None = None
) -> GraphQLSchema:
    schema = build_schema(sdl)
    assert_valid_schema(schema)
    bind_resolvers(schema, resolvers or {})
    return schema


def bind_resolvers(schema: GraphQLSchema, resolvers: Mapping[str, Resolver]) -> None:
    """Attach resolvers to the root fields they are named after.

    A name may match a field on more than one root type; it is bound to each.
    Names matching no root field, and values that cannot be called as
    ``resolver(args, context)``, are rejected.
    """
    roots: list[GraphQLObjectType] = [
        root
        for root in (
            schema.query_type,
            schema.mutation_type,
            schema.subscription_type,
        )
        if root is not None
    ]
    for name, resolver in resolvers.items():
        if not callable(resolver):
            raise ResolverBindingError(f"Resolver '{name}' is not callable.")
        try:
            signature(resolver).bind({}, None)
        except TypeError as e:
            raise ResolverBindingError(
                f"Resolver '{name}' must accept (args, context)."
            ) from e
        except ValueError:
            # builtins without an introspectable signature
            pass
        fields = [root.fields[name] for root in roots if name in root.fields]
        if not fields:
            raise ResolverBindingError(
                f"Resolver '{name}' does not match any root field of the schema."
            )
        for field in fields:
            field.resolve = _root_resolver(resolver)
        logger.debug("bound resolver %s to %d root field(s)", name, len(fields))


def _root_resolver(resolver: Resolver):
    def resolve(_root: Any, info, **args: Any) -> Any:
        return resolver(args, info.context)

    return resolve


# -------------------------------------------------------------------------------------------
# DOCUMENTS
# -------------------------------------------------------------------------------------------
def parse_document(source: str) -> DocumentNode:
    try:
        return parse(source)
    except GraphQLError as e:
        raise DocumentSyntaxError(e.message, [e]) from e


def validate_document(schema: GraphQLSchema, document: DocumentNode) -> None:
    errors = validate(schema, document)
    if errors:
        raise DocumentValidationError(errors[0].message, errors)


# -------------------------------------------------------------------------------------------
# EXECUTION
# -------------------------------------------------------------------------------------------
class Executor:
    schema: GraphQLSchema
    root_value: Any

    def __init__(self, schema: GraphQLSchema, root_value: Any = None):
        self.schema = schema
        self.root_value = root_value

    async def execute(
        self,
        document: DocumentNode,
        operation_name: str | None = None,
        variables: Mapping[str, Any] | None = None,
        context: Any = None,
    ) -> ExecutionResult:
        result = execute(
            self.schema,
            document,
            root_value=self.root_value,
            context_value=context,
            variable_values=dict(variables or {}),
            operation_name=operation_name,
        )
        if isawaitable(result):
            result = await result
        return result
