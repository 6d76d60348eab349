from typing import Any, Awaitable, Mapping
from logging import getLogger
from os.path import join, dirname, abspath
from string import Template
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from graphql_http.adapters.executor import Resolver
from graphql_http.config.graphql import graphql_settings, normalize_path
from graphql_http.engine import GraphQLEngine
from graphql_http.interfaces.errors import MalformedRequest, ProtocolError
from graphql_http.middleware.graphqlhelper import GraphQLHelper
from graphql_http.pipeline.formatter import (
    INTERNAL_ERROR_BODY,
    error_headers,
    format_error,
)
from graphql_http.policies.build_context import ContextFactory, build_context

logger = getLogger(__name__)

GRAPHIQL_TEMPLATE = join(dirname(abspath(__file__)), "../static/graphiql/index.html")


def register_graphql(
    app: FastAPI,
    schema: str,
    resolvers: Mapping[str, Resolver] | None = None,
    routes: bool | None = None,
    graphiql: bool | None = None,
    path: str | None = None,
    root_value: Any = None,
    context_factory: ContextFactory | None = None,
) -> GraphQLEngine:
    """Compile ``schema`` with ``resolvers`` and wire it into ``app``.

    Options left as ``None`` fall back to ``GraphQLSettings``. With routes
    disabled nothing is mounted and the path answers 404; the engine is still
    available on ``app.state.graphql``.
    """
    routes = graphql_settings.ROUTES if routes is None else routes
    graphiql = graphql_settings.GRAPHIQL if graphiql is None else graphiql
    path = graphql_settings.PATH if path is None else normalize_path(path)

    engine = GraphQLEngine(schema, resolvers, root_value=root_value)
    app.state.graphql = engine
    app.add_exception_handler(ProtocolError, protocol_error_handler)  # type: ignore

    if routes:
        app.include_router(build_router(engine, path, context_factory))
        if graphiql:
            app.include_router(build_graphiql_router(path))
    if graphiql:
        app.add_middleware(
            GraphQLHelper, engine=engine, context_factory=context_factory
        )
    logger.info(
        "graphql registered path=%s routes=%s graphiql=%s", path, routes, graphiql
    )
    return engine


def get_graphql_engine(request: Request) -> GraphQLEngine:
    # Used by FastAPI Depends
    return request.app.state.graphql


async def protocol_error_handler(request: Request, exc: ProtocolError):
    logger.info(
        "rid=%s rejected graphql request status_code=%s error=%s",
        getattr(request.state, "rid", None),
        exc.status_code,
        exc.message,
    )
    status, body = format_error(exc)
    return JSONResponse(body, status_code=status, headers=error_headers(exc))


def build_router(
    engine: GraphQLEngine, path: str, context_factory: ContextFactory | None = None
) -> APIRouter:
    router = APIRouter()

    @router.get(path)
    async def graphql_get(request: Request):
        async def pipeline():
            context = await build_context(request, context_factory)
            return await engine.handle(
                "GET", params=request.query_params, context=context
            )

        return await respond(request, pipeline())

    @router.post(path)
    async def graphql_post(request: Request):
        try:
            body = await request.json()
        except ValueError as e:
            raise MalformedRequest("POST body must be valid JSON.") from e

        async def pipeline():
            context = await build_context(request, context_factory)
            return await engine.handle("POST", body=body, context=context)

        return await respond(request, pipeline())

    return router


def build_graphiql_router(endpoint: str) -> APIRouter:
    router = APIRouter()
    with open(GRAPHIQL_TEMPLATE, encoding="utf-8") as template:
        page = Template(template.read())

    @router.get(graphql_settings.GRAPHIQL_PATH, response_class=HTMLResponse)
    async def graphiql(request: Request):
        # The fetcher needs the public URL, mount prefix included
        root_path = request.scope.get("root_path", "").rstrip("/")
        return HTMLResponse(page.safe_substitute(endpoint=root_path + endpoint))

    return router


async def respond(
    request: Request, pipeline: Awaitable[tuple[int, dict[str, Any]]]
) -> JSONResponse:
    try:
        status, body = await pipeline
    except ProtocolError:
        raise
    except Exception:
        logger.exception(
            "rid=%s graphql request failed", getattr(request.state, "rid", None)
        )
        status, body = 500, INTERNAL_ERROR_BODY
    return JSONResponse(body, status_code=status)
