"""Launcher facade -- the surface the desktop shell talks to."""

from __future__ import annotations

from pathlib import Path

from central_flow.config import LauncherConfig
from central_flow.effects import CommandExecutor, SubprocessExecutor
from central_flow.icons.resolver import IconResolver
from central_flow.models import ResultSummary
from central_flow.providers.base import ProviderContext
from central_flow.providers.registry import ProviderRegistry
from central_flow.search.aggregator import ResultAggregator
from central_flow.telemetry import NoOpTelemetrySink, TelemetrySink


class Launcher:
    """Wires config, executor, icon resolver, registry and aggregator.

    Nothing here is process-global: tests build as many isolated
    launchers as they like, each with its own executor and config.
    """

    def __init__(
        self,
        config: LauncherConfig | None = None,
        *,
        executor: CommandExecutor | None = None,
        icons: IconResolver | None = None,
        telemetry_sink: TelemetrySink | None = None,
    ) -> None:
        self.config = config or LauncherConfig()
        self.executor = executor or SubprocessExecutor()
        self.icons = icons or IconResolver.from_config(self.config)
        sink = telemetry_sink or NoOpTelemetrySink()
        context = ProviderContext(config=self.config, icons=self.icons, executor=self.executor)
        self.registry = ProviderRegistry(context, telemetry_sink=sink)
        self.aggregator = ResultAggregator(self.registry, telemetry_sink=sink)

    @classmethod
    async def create(
        cls,
        config: LauncherConfig | None = None,
        *,
        executor: CommandExecutor | None = None,
        icons: IconResolver | None = None,
        telemetry_sink: TelemetrySink | None = None,
        load_external: bool = True,
    ) -> Launcher:
        """Build a launcher and load the configured builtin and external providers."""
        launcher = cls(config, executor=executor, icons=icons, telemetry_sink=telemetry_sink)
        await launcher.load_builtins(launcher.config.builtin_providers)
        external = launcher.config.external_provider_directory
        if load_external and external is not None:
            launcher.load_external(external)
        return launcher

    async def load_builtins(self, names: list[str]) -> None:
        await self.registry.register_builtin(names)

    def load_external(self, directory: str | Path) -> None:
        self.registry.register_external(directory)

    async def search(self, query: str, provider_id: str | None = None) -> list[ResultSummary]:
        return await self.aggregator.search(query, provider_id)

    async def execute(self, result_id: str) -> None:
        await self.aggregator.execute(result_id)
