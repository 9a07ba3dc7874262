from __future__ import annotations

import json
import logging
import random
from typing import Any, Dict, Mapping, Optional

from ..core.ports import DecisionLogSink

_DEFAULT_CATEGORY_RATES: Dict[str, float] = {"deny": 1.0, "error": 1.0}


class DecisionLogger(DecisionLogSink):
    """Audit sink for :class:`drakonis.AccessControl` decisions.

    Options:
      - ``sample_rate``: probability of emitting a record (0.0..1.0).
      - ``smart_sampling``: when True, the rate is chosen per decision category
        (``grant``, ``deny``, ``error``) from ``category_sampling_rates``; categories
        not listed fall back to ``sample_rate``. Defaults always keep denies and errors.
      - ``as_json``: emit one JSON object per record instead of ``decision {...}``.
      - ``include_caller_repr``: add ``repr(caller)`` to the record. Off by default
        because callers are opaque and may hold credentials.
    """

    def __init__(
        self,
        *,
        sample_rate: float = 1.0,
        logger_name: str = "drakonis.audit",
        as_json: bool = False,
        level: int = logging.INFO,
        smart_sampling: bool = False,
        category_sampling_rates: Optional[Mapping[str, float]] = None,
        include_caller_repr: bool = False,
    ) -> None:
        self.sample_rate = float(sample_rate)
        self.logger = logging.getLogger(logger_name)
        self.as_json = as_json
        self.level = level
        self.smart_sampling = bool(smart_sampling)
        self.category_sampling_rates: Dict[str, float] = dict(
            _DEFAULT_CATEGORY_RATES if category_sampling_rates is None else category_sampling_rates
        )
        self.include_caller_repr = bool(include_caller_repr)

    # -- sampling --------------------------------------------------------------

    def _effective_rate(self, payload: Mapping[str, Any]) -> float:
        if not self.smart_sampling:
            return self.sample_rate
        category = str(payload.get("decision") or ("grant" if payload.get("allowed") else "deny"))
        return float(self.category_sampling_rates.get(category, self.sample_rate))

    @staticmethod
    def _should_log(rate: float) -> bool:
        if rate <= 0.0:
            return False
        if rate >= 1.0:
            return True
        return random.random() < rate

    # -- DecisionLogSink ---------------------------------------------------------

    def log(self, payload: Dict[str, Any]) -> None:
        if not self._should_log(self._effective_rate(payload)):
            return

        record = {k: v for k, v in payload.items() if k != "caller"}
        if self.include_caller_repr and "caller" in payload:
            record["caller"] = repr(payload["caller"])

        if self.as_json:
            try:
                msg = json.dumps(record, ensure_ascii=False, default=str)
            except (TypeError, ValueError):
                msg = f"decision {record}"
        else:
            msg = f"decision {record}"
        self.logger.log(self.level, msg)


__all__ = ["DecisionLogger"]
