from typing import Any, Callable
from inspect import isawaitable
from fastapi import Request

ContextFactory = Callable[[Request], Any]


async def build_context(
    request: Request, factory: ContextFactory | None = None
) -> Any:
    # Resolvers receive this as their second argument
    if factory is None:
        return {"request": request, "rid": getattr(request.state, "rid", None)}
    context = factory(request)
    if isawaitable(context):
        context = await context
    return context
