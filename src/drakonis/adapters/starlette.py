from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Optional

try:
    from starlette.concurrency import run_in_threadpool  # type: ignore[import-not-found]
    from starlette.responses import JSONResponse  # type: ignore[import-not-found]
except Exception:  # pragma: no cover
    JSONResponse = None  # type: ignore[assignment,misc]
    run_in_threadpool = None  # type: ignore[assignment]

from ..core.engine import AccessControl
from ._common import EnvBuilder

logger = logging.getLogger("drakonis.adapters.starlette")


def _deny_headers(reason: Optional[str], add_headers: bool) -> dict[str, str]:
    if not add_headers or not reason:
        return {}
    return {"X-Drakonis-Reason": str(reason)}


def require_access(
    control: AccessControl,
    build_env: EnvBuilder,
    add_headers: bool = False,
) -> Callable[..., Any]:
    """
    Starlette guard that works both:
      - as a decorator on an endpoint (sync or async), returning an async endpoint
      - as a dependency-like callable: `deny = await require_access(...)(request)`

    Denied requests get a JSON 403. Exceptions raised by dynamic rules are not
    turned into denies; they propagate to Starlette's error handling.
    """
    if JSONResponse is None or run_in_threadpool is None:
        raise RuntimeError(
            "require_access requires 'starlette' installed. "
            "Install with extra: drakonis-guard[starlette]."
        )

    async def _dependency(request: Any) -> Any:
        caller, resource, action, instance = build_env(request)
        decision = control.evaluate(caller, resource, action, instance)
        if decision.allowed:
            return None
        logger.debug(
            "Drakonis: denied %s on %s (%s)", decision.action, decision.resource, decision.reason
        )
        return JSONResponse(
            {"detail": "Forbidden"},
            status_code=403,
            headers=_deny_headers(decision.reason, add_headers),
        )

    def _decorator_or_dependency(arg: Any) -> Any:
        if not callable(arg):
            return _dependency(arg)

        handler = arg
        if inspect.iscoroutinefunction(handler):

            async def _endpoint_async(request: Any) -> Any:
                deny = await _dependency(request)
                if deny is not None:
                    return deny
                return await handler(request)

            return _endpoint_async

        async def _endpoint_sync(request: Any) -> Any:
            deny = await _dependency(request)
            if deny is not None:
                return deny
            return await run_in_threadpool(handler, request)

        return _endpoint_sync

    return _decorator_or_dependency


__all__ = ["require_access"]
