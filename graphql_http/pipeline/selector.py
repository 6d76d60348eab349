from __future__ import annotations
from dataclasses import dataclass
from graphql import DocumentNode, OperationDefinitionNode, OperationType
from graphql_http.interfaces.errors import (
    AmbiguousOperation,
    MalformedRequest,
    UnknownOperationName,
)


@dataclass(frozen=True)
class SelectedOperation:
    definition: OperationDefinitionNode

    @property
    def kind(self) -> OperationType:
        return self.definition.operation

    @property
    def name(self) -> str | None:
        return self.definition.name.value if self.definition.name else None


def select_operation(
    document: DocumentNode, operation_name: str | None = None
) -> SelectedOperation:
    operations = [
        definition
        for definition in document.definitions
        if isinstance(definition, OperationDefinitionNode)
    ]
    if not operations:
        raise MalformedRequest("Must provide an operation.")

    if operation_name is None:
        if len(operations) > 1:
            raise AmbiguousOperation(
                "Must provide operation name if query contains multiple operations."
            )
        return SelectedOperation(operations[0])

    for operation in operations:
        if operation.name and operation.name.value == operation_name:
            return SelectedOperation(operation)
    raise UnknownOperationName(f"Unknown operation named '{operation_name}'.")
