from logging import getLogger
from fastapi import Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi_offline import FastAPIOffline
from graphql_http.middleware.requestlogger import RequestLogger
from graphql_http.routers.graphql import register_graphql
from graphql_http.config.general import general

logger = getLogger(__name__)

schema = """
    type Query {
        add(x: Int, y: Int): Int
    }
"""


async def add(args, context):
    return args["x"] + args["y"]


app = FastAPIOffline(
    title=general.PROJECT_NAME,
    version=general.API_VERSION,
    root_path=general.MOUNT_PATH,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_graphql(app, schema=schema, resolvers={"add": add}, graphiql=True)

# Outermost, so the request id is set before any other middleware runs
app.add_middleware(RequestLogger)


@app.get("/")
async def index(request: Request):
    return await request.state.graphql("{ add(x: 2, y: 2) }")
