"""Results for secondary side effects whose failure must not fail a request."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

ResultT = TypeVar("ResultT")


@dataclass(frozen=True)
class BestEffortResult(Generic[ResultT]):
    ok: bool
    value: ResultT | None = None
    error: str | None = None
    skipped: bool = False

    @classmethod
    def success(cls, value: ResultT | None = None) -> BestEffortResult[ResultT]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> BestEffortResult[ResultT]:
        return cls(ok=False, error=error)

    @classmethod
    def skip(cls, reason: str | None = None) -> BestEffortResult[ResultT]:
        return cls(ok=True, skipped=True, error=reason)

    def as_dict(self) -> dict[str, object]:
        return {"ok": self.ok, "skipped": self.skipped, "error": self.error}


def run_best_effort(
    action: Callable[[], ResultT],
    *,
    logger: logging.Logger,
    description: str,
) -> BestEffortResult[ResultT]:
    """Run ``action``; log and return failures instead of raising them."""
    try:
        return BestEffortResult.success(action())
    except Exception as exc:  # noqa: BLE001
        logger.warning("%s failed: %s", description, exc)
        return BestEffortResult.failure(str(exc) or type(exc).__name__)
