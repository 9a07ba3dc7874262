from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Tuple

logger = logging.getLogger("drakonis.roles")


def _raw_roles(caller: Any) -> Any:
    if caller is None:
        return None
    if isinstance(caller, Mapping):
        return caller.get("roles")
    return getattr(caller, "roles", None)


def caller_roles(caller: Any) -> Tuple[str, ...]:
    """Return the distinct role names held by *caller*, in first-seen order.

    Roles are read from a ``roles`` attribute or, for mappings, a ``"roles"`` key.
    A caller without roles, with a non-iterable value or with a bare string holds
    no roles. Entries that are not strings are skipped.
    """
    raw = _raw_roles(caller)
    if raw is None:
        return ()
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        logger.debug("Drakonis: caller roles are not a collection of names: %r", type(raw))
        return ()
    seen: dict[str, None] = {}
    for role in raw:
        if isinstance(role, str):
            seen.setdefault(role, None)
    return tuple(seen)


__all__ = ["caller_roles"]
