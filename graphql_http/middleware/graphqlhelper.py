# This software is provided to the United States Government (USG) with SBIR Data Rights as defined at Federal Acquisition Regulation 52.227-14, "Rights in Data-SBIR Program" (May 2014) SBIR Rights Notice (Dec 2023-2024) These SBIR data are furnished with SBIR rights under Contract No. H9241522D0001. For a period of 19 years, unless extended in accordance with FAR 27.409(h), after acceptance of all items to be delivered under this contract, the Government will use these data for Government purposes only, and they shall not be disclosed outside the Government (including disclosure for procurement purposes) during such period without permission of the Contractor, except that, subject to the foregoing use and disclosure prohibitions, these data may be disclosed for use by support Contractors. After the protection period, the Government has a paid-up license to use, and to authorize others to use on its behalf, these data for Government purposes, but is relieved of all disclosure prohibitions and assumes no liability for unauthorized use of these data by third parties. This notice shall be affixed to any reproductions of these data, in whole or in part.
from typing import Any, Mapping
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
from graphql_http.engine import GraphQLEngine
from graphql_http.policies.build_context import ContextFactory, build_context


class GraphQLHelper(BaseHTTPMiddleware):
    """Expose ``request.state.graphql(source, variables, operation_name)``.

    Any handler can run an operation through the same pipeline as the GraphQL
    route. The caller is trusted, so mutations are allowed; protocol failures
    propagate as ``ProtocolError`` for the app's exception handler.
    """

    def __init__(
        self,
        app: ASGIApp,
        engine: GraphQLEngine,
        context_factory: ContextFactory | None = None,
    ):
        super().__init__(app)
        self.engine = engine
        self.context_factory = context_factory

    async def dispatch(self, request: Request, call_next):
        async def graphql(
            source: str,
            variables: Mapping[str, Any] | None = None,
            operation_name: str | None = None,
        ) -> dict[str, Any]:
            context = await build_context(request, self.context_factory)
            return await self.engine.run_query(
                source, variables, operation_name, context=context
            )

        request.state.graphql = graphql
        return await call_next(request)
