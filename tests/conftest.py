from typing import Any, Callable
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from graphql_http.routers.graphql import register_graphql

ADD_SCHEMA = """
    type Query {
        add(x: Int, y: Int): Int
    }
"""

MESSAGE_SCHEMA = """
    type Mutation {
        setMessage(message: String): String
    }

    type Query {
        getMessage: String
    }
"""


async def add(args, context):
    return args["x"] + args["y"]


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    """Build a client for a fresh app registered with the given options."""

    def factory(schema: str = ADD_SCHEMA, resolvers: Any = None, **options) -> TestClient:
        app = FastAPI()
        register_graphql(
            app,
            schema=schema,
            resolvers={"add": add} if resolvers is None else resolvers,
            **options,
        )
        return TestClient(app)

    return factory


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
