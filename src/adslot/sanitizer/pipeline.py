"""The sanitizer pipeline: an ordered chain of independent filter stages."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import partial
from typing import Any, Optional

from adslot.sanitizer.allowlist import strip_disallowed_tags
from adslot.sanitizer.parser import parse
from adslot.sanitizer.policy import AD_POLICY, Policy
from adslot.sanitizer.prefilter import prefilter
from adslot.sanitizer.serializer import serialize
from adslot.sanitizer.tree import sanitize_tree

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 3


@dataclass(frozen=True)
class Filter:
    """One named pipeline stage. Input and output types vary by stage."""

    name: str
    apply: Callable[[Any], Any]


def default_filters(policy: Policy = AD_POLICY) -> tuple[Filter, ...]:
    """Build the standard five-stage chain for ``policy``.

    Order matters: each stage only ever sees the previous stage's output.
    """
    return (
        Filter("prefilter", prefilter),
        Filter("allowlist", partial(strip_disallowed_tags, allowed_tags=policy.allowed_tags)),
        Filter("parse", parse),
        Filter("sanitize", partial(sanitize_tree, policy=policy)),
        Filter("serialize", serialize),
    )


class MarkupSanitizer:
    """Turn untrusted ad markup into a safe fragment.

    The chain is re-run on its own output until the result is stable, or
    ``max_passes`` runs have happened. A later stage can expose a pattern an
    earlier stage would have removed (unwrapping a tag may leave
    ``x="javascript:..."`` behind as plain text), and re-running keeps the
    result idempotent.

    Instances hold no per-call state and are safe to share between threads.
    """

    def __init__(
        self,
        policy: Policy = AD_POLICY,
        filters: Optional[Sequence[Filter]] = None,
        max_passes: int = DEFAULT_MAX_PASSES,
    ) -> None:
        self.policy = policy
        self.filters: tuple[Filter, ...] = tuple(filters) if filters is not None else default_filters(policy)
        self.max_passes = max(1, max_passes)

    def _run_chain(self, text: str) -> str:
        value: Any = text
        for stage in self.filters:
            value = stage.apply(value)
        return value

    def sanitize(self, raw: Optional[str]) -> str:
        if not raw:
            return ""
        try:
            result = self._run_chain(raw)
            for _ in range(self.max_passes - 1):
                again = self._run_chain(result)
                if again == result:
                    break
                result = again
            return result
        except Exception:
            # Fail closed: nothing from a half-processed input is returned.
            logger.exception("Markup sanitizer failed; discarding content")
            return ""

    __call__ = sanitize


_default_sanitizer = MarkupSanitizer()


def sanitize_ad_markup(raw: Optional[str], policy: Optional[Policy] = None) -> str:
    """Sanitize ad creative markup. Always returns a string, never raises."""
    if policy is None or policy is AD_POLICY:
        return _default_sanitizer.sanitize(raw)
    return MarkupSanitizer(policy).sanitize(raw)
