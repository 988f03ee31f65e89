"""Result aggregation -- fan out a query, rank the candidates, hold the set.

``search`` runs every provider concurrently, merges what comes back,
ranks it, mints a fresh id per result and replaces the held result set.
``execute`` resolves an id against that set only, so ids from an earlier
search are gone as soon as a newer one lands.

Ranking: provider priority descending, then title by locale-style
collation.  Priorities are read from the registry at aggregation time.

Overlapping ``search`` calls are not cancelled; whichever finishes last
owns the held set.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from central_flow.errors import ResultNotFoundError
from central_flow.models import ResultSummary
from central_flow.providers.base import Action, Candidate, Provider, coerce_candidate
from central_flow.providers.registry import ProviderRegistry
from central_flow.search.collation import collation_key
from central_flow.telemetry import NoOpTelemetrySink, TelemetryEvent, TelemetrySink

logger = logging.getLogger(__name__)


@dataclass
class RankedResult:
    id: str
    title: str
    icon: str | None
    provider_id: str
    provider_priority: float
    action: Action

    def summary(self) -> ResultSummary:
        return ResultSummary(id=self.id, title=self.title, icon=self.icon)


def _new_result_id() -> str:
    return uuid.uuid4().hex


def rank_candidates(
    candidates: Sequence[Candidate],
    priorities: dict[str, float],
    *,
    id_factory: Callable[[], str] = _new_result_id,
) -> list[RankedResult]:
    """Attach ids and priorities, then sort.  Input order is the tie baseline."""
    ranked = [
        RankedResult(
            id=id_factory(),
            title=candidate.title,
            icon=candidate.icon,
            provider_id=candidate.provider_id,
            provider_priority=priorities.get(candidate.provider_id, 0),
            action=candidate.action,
        )
        for candidate in candidates
    ]
    ranked.sort(key=lambda r: (-r.provider_priority, collation_key(r.title)))
    return ranked


class ResultAggregator:
    """Turns queries into ranked, addressable results.

    Parameters
    ----------
    registry:
        Source of providers and their current priorities.
    telemetry_sink:
        Receives ``search.completed``, ``provider.search_failed`` and
        ``result.executed`` events.
    id_factory:
        Mints result ids.  Defaults to random UUID hex strings.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        *,
        telemetry_sink: TelemetrySink | None = None,
        id_factory: Callable[[], str] = _new_result_id,
    ) -> None:
        self.registry = registry
        self.telemetry = telemetry_sink or NoOpTelemetrySink()
        self._id_factory = id_factory
        self._results: list[RankedResult] = []

    @property
    def results(self) -> tuple[RankedResult, ...]:
        """The currently held result set, in ranked order."""
        return tuple(self._results)

    async def search(
        self, query: str, provider_id: str | None = None
    ) -> list[ResultSummary]:
        """Fan out ``query`` and return the ranked summaries.

        With ``provider_id`` only that provider runs; an unknown id gives
        an empty list.  A provider that fails contributes nothing.
        """
        started = time.perf_counter()
        if provider_id is not None:
            target = self.registry.get(provider_id)
            providers = [target] if target is not None else []
        else:
            providers = self.registry.list_providers()

        per_provider = await asyncio.gather(
            *(self._search_provider(provider, query) for provider in providers)
        )

        candidates = [c for batch in per_provider for c in batch]
        if provider_id is not None:
            candidates = [c for c in candidates if c.provider_id == provider_id]

        ranked = rank_candidates(
            candidates, self.registry.priority_map(), id_factory=self._id_factory
        )
        self._results = ranked

        self._emit(
            "search.completed",
            query=query,
            provider_filter=provider_id,
            providers=len(providers),
            results=len(ranked),
            duration_ms=round((time.perf_counter() - started) * 1000, 3),
        )
        return [result.summary() for result in ranked]

    async def _search_provider(self, provider: Provider, query: str) -> list[Candidate]:
        """Run one provider with its failures contained."""
        try:
            returned: Any = provider.search(query)
            if inspect.isawaitable(returned):
                returned = await returned
            if returned is None:
                return []
            if not isinstance(returned, (list, tuple)):
                raise TypeError(
                    f"search() returned {type(returned).__name__}, expected a list"
                )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Provider '%s' search failed", provider.id, exc_info=exc)
            self._emit("provider.search_failed", provider_id=provider.id, error=str(exc))
            return []

        candidates: list[Candidate] = []
        for item in returned:
            candidate = coerce_candidate(item, provider.id)
            if candidate is None:
                logger.warning(
                    "Provider '%s' returned an invalid candidate: %r", provider.id, item
                )
                continue
            candidates.append(candidate)
        return candidates

    async def execute(self, result_id: str) -> None:
        """Invoke the action bound to ``result_id`` in the held set.

        Raises ResultNotFoundError for unknown or superseded ids.  Errors
        raised by the action propagate unchanged.
        """
        result = next((r for r in self._results if r.id == result_id), None)
        if result is None:
            raise ResultNotFoundError(result_id)

        logger.info("Executing '%s' from provider '%s'", result.title, result.provider_id)
        outcome = result.action()
        if inspect.isawaitable(outcome):
            await outcome
        self._emit("result.executed", result_id=result_id, provider_id=result.provider_id)

    def _emit(self, event_name: str, /, **attrs: Any) -> None:
        self.telemetry.emit(TelemetryEvent(name=event_name, attributes=attrs))
