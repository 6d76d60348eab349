# This software is provided to the United States Government (USG) with SBIR Data Rights as defined at Federal Acquisition Regulation 52.227-14, "Rights in Data-SBIR Program" (May 2014) SBIR Rights Notice (Dec 2023-2024) These SBIR data are furnished with SBIR rights under Contract No. H9241522D0001. For a period of 19 years, unless extended in accordance with FAR 27.409(h), after acceptance of all items to be delivered under this contract, the Government will use these data for Government purposes only, and they shall not be disclosed outside the Government (including disclosure for procurement purposes) during such period without permission of the Contractor, except that, subject to the foregoing use and disclosure prohibitions, these data may be disclosed for use by support Contractors. After the protection period, the Government has a paid-up license to use, and to authorize others to use on its behalf, these data for Government purposes, but is relieved of all disclosure prohibitions and assumes no liability for unauthorized use of these data by third parties. This notice shall be affixed to any reproductions of these data, in whole or in part.
from __future__ import annotations
from pydantic import field_validator
from graphql_http.config._base import Base


class GraphQLSettings(Base):
    # Route registration defaults, overridable per register_graphql() call
    ROUTES: bool = True
    GRAPHIQL: bool = False
    PATH: str = "/graphql"
    GRAPHIQL_PATH: str = "/graphiql"

    @field_validator("PATH", "GRAPHIQL_PATH")
    @classmethod
    def valid_route_path(cls, value: str) -> str:
        return normalize_path(value)


def normalize_path(value: str) -> str:
    value = value.strip()
    if not value.startswith("/"):
        value = f"/{value}"
    if len(value) > 1:
        value = value.rstrip("/")
    return value


graphql_settings = GraphQLSettings()
