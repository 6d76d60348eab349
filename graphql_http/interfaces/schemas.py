from typing import Any
from pydantic import BaseModel, Field, field_validator
from pydantic.types import JsonValue


class GraphQLRequest(BaseModel):
    operationName: str | None = None
    query: str
    variables: dict[str, JsonValue] | None = None


class OperationRequest(BaseModel):
    document_source: str
    variables: dict[str, Any] = Field(default_factory=dict)
    operation_name: str | None = None

    @field_validator("variables", mode="before")
    @classmethod
    def empty_variables(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("operation_name", mode="before")
    @classmethod
    def blank_operation_name(cls, value: Any) -> Any:
        return value if value else None
