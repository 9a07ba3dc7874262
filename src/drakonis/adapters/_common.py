from __future__ import annotations

from typing import Any, Callable, Tuple

# build_env(request) -> (caller, resource, action, resource_instance)
EnvBuilder = Callable[[Any], Tuple[Any, str, str, Any]]

__all__ = ["EnvBuilder"]
