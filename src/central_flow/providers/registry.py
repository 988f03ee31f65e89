"""Provider registry -- the ordered set of active providers.

Providers enter through three doors:
  - register(): an already constructed object
  - register_builtin(): bundled modules under ``central_flow.plugins``
  - register_external(): ``<directory>/<name>/plugin.py`` files

Every door runs the same structural validation.  The two loaders are
best-effort: a bad item is logged, recorded in ``failures`` and
skipped, and loading continues with the next one.

Iteration order is registration order.  Priority only matters when the
aggregator ranks results.
"""

from __future__ import annotations

import importlib
import importlib.util
import inspect
import logging
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Literal

from central_flow.errors import ProviderContractError, ProviderLoadError
from central_flow.providers.base import (
    Provider,
    ProviderContext,
    provider_priority,
    validate_provider,
)
from central_flow.telemetry import NoOpTelemetrySink, TelemetryEvent, TelemetrySink

logger = logging.getLogger(__name__)

BUILTIN_PACKAGE = "central_flow.plugins"
EXTERNAL_ENTRY_FILE = "plugin.py"
_EXTERNAL_MODULE_PREFIX = "central_flow_external"

LoadSource = Literal["builtin", "external"]


@dataclass(frozen=True)
class LoadFailure:
    """A provider that could not be admitted, and why."""

    source: LoadSource
    name: str
    error: str


def builtin_module_name(name: str) -> str:
    return f"{BUILTIN_PACKAGE}.{name.strip().replace('-', '_')}"


class ProviderRegistry:
    """Holds the active providers in registration order.

    Parameters
    ----------
    context:
        Services passed to provider factories (``create_provider``).
        Required for bundled providers; external ones may ignore it.
    telemetry_sink:
        Receives ``registry.provider_loaded`` and ``registry.load_failed``.
    """

    def __init__(
        self,
        context: ProviderContext | None = None,
        *,
        telemetry_sink: TelemetrySink | None = None,
    ) -> None:
        self._context = context
        self._providers: list[Provider] = []
        self._failures: list[LoadFailure] = []
        self.telemetry = telemetry_sink or NoOpTelemetrySink()

    # ── direct registration ───────────────────────────────────────

    def register(self, provider: object) -> Provider:
        """Validate and append a provider.

        Raises ProviderContractError if the object does not satisfy the
        contract or its id is already registered.
        """
        admitted = validate_provider(provider)
        if self.get(admitted.id) is not None:
            raise ProviderContractError(
                admitted.id, [f"duplicate provider id registered: {admitted.id!r}"]
            )
        self._providers.append(admitted)
        logger.info("Provider loaded: %s (%s)", admitted.name, admitted.id)
        self._emit("registry.provider_loaded", provider_id=admitted.id)
        return admitted

    def unregister(self, provider_id: str) -> bool:
        """Remove a provider by id.  Returns False if it was not registered."""
        for index, provider in enumerate(self._providers):
            if provider.id == provider_id:
                del self._providers[index]
                return True
        return False

    # ── loaders ───────────────────────────────────────────────────

    async def register_builtin(self, names: list[str]) -> None:
        """Load bundled providers by name, e.g. ``["window-list"]``.

        Each name maps to module ``central_flow.plugins.<name>`` (dashes
        become underscores) exposing ``create_provider(context)``.
        """
        for name in names:
            try:
                provider = await self._instantiate_builtin(name)
                self.register(provider)
            except Exception as exc:  # noqa: BLE001
                self._record_failure("builtin", name, exc)

    def register_external(self, directory: str | Path) -> None:
        """Load third-party providers from ``<directory>/<name>/plugin.py``.

        A missing directory or a subdirectory without the entry file is
        not an error.
        """
        directory = Path(directory)
        if not directory.is_dir():
            logger.debug("External provider directory does not exist: %s", directory)
            return

        for plugin_dir in sorted(directory.iterdir()):
            if not plugin_dir.is_dir() or plugin_dir.name.startswith(("_", ".")):
                continue
            entry = plugin_dir / EXTERNAL_ENTRY_FILE
            if not entry.is_file():
                continue
            try:
                module = _import_external_module(plugin_dir.name, entry)
                provider = self._provider_from_module(plugin_dir.name, module)
                if inspect.isawaitable(provider):
                    close = getattr(provider, "close", None)
                    if callable(close):
                        close()
                    raise ProviderLoadError(
                        plugin_dir.name,
                        "external create_provider must be synchronous",
                    )
                self.register(provider)
            except SystemExit as exc:
                self._record_failure(
                    "external",
                    plugin_dir.name,
                    ProviderLoadError(
                        plugin_dir.name, f"exited during load (code {exc.code!r})"
                    ),
                )
            except Exception as exc:  # noqa: BLE001
                self._record_failure("external", plugin_dir.name, exc)

    async def _instantiate_builtin(self, name: str) -> Any:
        module_name = builtin_module_name(name)
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            if exc.name != module_name:
                raise
            raise ProviderLoadError(name, f"no bundled provider module {module_name}") from exc
        provider = self._provider_from_module(name, module)
        if inspect.isawaitable(provider):
            provider = await provider
        return provider

    def _provider_from_module(self, name: str, module: ModuleType) -> Any:
        factory = getattr(module, "create_provider", None)
        if callable(factory):
            return factory(self._context)
        provider = getattr(module, "provider", None)
        if provider is not None:
            return provider
        raise ProviderLoadError(
            name, "module defines neither create_provider() nor provider"
        )

    def _record_failure(self, source: LoadSource, name: str, exc: Exception) -> None:
        failure = LoadFailure(source=source, name=name, error=str(exc))
        self._failures.append(failure)
        if isinstance(exc, ProviderLoadError):
            logger.error("Failed to load %s provider %r: %s", source, name, exc)
        else:
            logger.exception("Failed to load %s provider %r", source, name, exc_info=exc)
        self._emit(
            "registry.load_failed", source=source, provider_name=name, error=str(exc)
        )

    def _emit(self, event_name: str, /, **attrs: Any) -> None:
        self.telemetry.emit(TelemetryEvent(name=event_name, attributes=attrs))

    # ── queries ───────────────────────────────────────────────────

    def list_providers(self) -> list[Provider]:
        """Registered providers in registration order."""
        return list(self._providers)

    def get(self, provider_id: str) -> Provider | None:
        for provider in self._providers:
            if provider.id == provider_id:
                return provider
        return None

    def priority_map(self) -> dict[str, float]:
        """Current ``{provider_id: priority}``, read fresh on every call."""
        return {p.id: provider_priority(p) for p in self._providers}

    @property
    def failures(self) -> list[LoadFailure]:
        return list(self._failures)

    def __len__(self) -> int:
        return len(self._providers)


def _import_external_module(name: str, entry: Path) -> ModuleType:
    slug = re.sub(r"\W", "_", name)
    module_name = f"{_EXTERNAL_MODULE_PREFIX}_{slug}"
    spec = importlib.util.spec_from_file_location(module_name, entry)
    if spec is None or spec.loader is None:
        raise ProviderLoadError(name, f"cannot import {entry}")
    module = importlib.util.module_from_spec(spec)
    # Registered before exec so dataclasses and pickling inside the plugin work.
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module
