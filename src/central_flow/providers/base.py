"""Provider capability contract, candidates, and structural validation.

Providers come from two places: bundled modules under
``central_flow.plugins`` and third-party ``plugin.py`` files loaded at
runtime.  Both are admitted only after :func:`validate_provider` has
checked the shape of the object, since nothing about an external file
is known until it has been imported.
"""

from __future__ import annotations

import numbers
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from central_flow.errors import ProviderContractError

if TYPE_CHECKING:
    from central_flow.config import LauncherConfig
    from central_flow.effects import CommandExecutor
    from central_flow.icons.resolver import IconResolver

Action = Callable[[], Any]


@dataclass
class Candidate:
    """One unranked result produced by a provider.

    ``action`` is a zero-argument callable.  It may return an awaitable,
    which ``ResultAggregator.execute`` awaits.  ``score`` is the
    provider's own relevance (0-100) and plays no part in global ranking.
    """

    provider_id: str
    title: str
    action: Action
    description: str | None = None
    icon: str | None = None
    score: float | None = None


@runtime_checkable
class Provider(Protocol):
    """Minimal capability every provider exposes.

    ``priority`` and ``description`` are optional attributes; a missing
    priority counts as 0.
    """

    id: str
    name: str

    def search(self, query: str) -> Awaitable[list[Candidate]]: ...


@dataclass
class ProviderContext:
    """Shared services handed to provider factories."""

    config: LauncherConfig
    icons: IconResolver
    executor: CommandExecutor


ProviderFactory = Callable[[ProviderContext], Any]


def provider_priority(provider: object) -> float:
    priority = getattr(provider, "priority", None)
    if priority is None:
        return 0
    return priority


def contract_problems(obj: object) -> list[str]:
    """Return every way ``obj`` falls short of the provider contract."""
    problems: list[str] = []
    for attr in ("id", "name"):
        value = getattr(obj, attr, None)
        if not isinstance(value, str) or not value.strip():
            problems.append(f"'{attr}' must be a non-empty string")
    if not callable(getattr(obj, "search", None)):
        problems.append("'search' must be callable")
    priority = getattr(obj, "priority", None)
    if priority is not None and (
        isinstance(priority, bool) or not isinstance(priority, numbers.Real)
    ):
        problems.append("'priority' must be a number")
    return problems


def validate_provider(obj: object, *, name: str = "") -> Provider:
    """Admit ``obj`` as a provider or raise :class:`ProviderContractError`."""
    problems = contract_problems(obj)
    if problems:
        label = name or str(getattr(obj, "id", "") or type(obj).__name__)
        raise ProviderContractError(label, problems)
    return obj  # type: ignore[return-value]


def coerce_candidate(item: object, provider_id: str) -> Candidate | None:
    """Accept a :class:`Candidate` or a plain mapping record from a provider.

    Mappings may use ``provider_id`` or ``pluginId``; both default to the
    producing provider.  Anything without a string title and a callable
    action, or with a non-string provider id, description or icon, is
    rejected with ``None``.
    """
    if isinstance(item, Candidate):
        candidate = item
    elif isinstance(item, Mapping):
        candidate = Candidate(
            provider_id=item.get("provider_id") or item.get("pluginId") or provider_id,
            title=item.get("title"),
            action=item.get("action"),
            description=item.get("description"),
            icon=item.get("icon"),
            score=item.get("score"),
        )
    else:
        return None
    return candidate if not candidate_problems(candidate) else None


def candidate_problems(candidate: Candidate) -> list[str]:
    problems: list[str] = []
    if not isinstance(candidate.provider_id, str):
        problems.append("'provider_id' must be a string")
    if not isinstance(candidate.title, str):
        problems.append("'title' must be a string")
    if not callable(candidate.action):
        problems.append("'action' must be callable")
    for attr in ("description", "icon"):
        value = getattr(candidate, attr)
        if value is not None and not isinstance(value, str):
            problems.append(f"'{attr}' must be a string")
    score = candidate.score
    if score is not None and (isinstance(score, bool) or not isinstance(score, numbers.Real)):
        problems.append("'score' must be a number")
    return problems
