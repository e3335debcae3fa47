"""
Documentation build - the orchestrator of the plugin system.

This module ties together:
1. Introspection normalization (one Schema per build)
2. Plugin instantiation (registration order)
3. Asset collection (once per build)
4. Page generation (index, then one page per documented type)

Every capability call is treated as a potential coroutine and awaited, so
synchronous and asynchronous plugins mix freely. Calls for one page may run
concurrently; their results are always merged in registration order.
"""
from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Sequence, Union

from dotenv import load_dotenv

from .aggregator import PageResult, PluginContribution, aggregate_page, merge_assets
from .introspection import Introspection, normalize
from .plugins.base import PAGE_CAPABILITIES, Capability, PluginConstructor
from .plugins.registry import PluginInstance, PluginRegistry, get_registry
from .schema import Schema
from .utils import (
    InvalidTypeRefError,
    MalformedIntrospectionError,
    PluginExecutionError,
    env_bool,
    env_int,
)

logger = logging.getLogger(__name__)

CallOutcome = tuple[list[Any], Optional[PluginExecutionError]]


@dataclass
class BuildConfig:
    """Configuration for a documentation build."""

    # Issue the calls of one capability across plugins concurrently
    concurrent_capabilities: bool = True

    # Pages generated at the same time (1 = one page after the other)
    max_concurrent_pages: int = 1

    # Leave out __Schema, __Type, ... pages
    skip_introspection_types: bool = True

    # Keep building other pages when a page hits a broken type reference
    continue_on_page_error: bool = True

    # Fold navigation sections that share a title
    dedupe_navigations: bool = False

    def __post_init__(self):
        if self.max_concurrent_pages < 1:
            raise ValueError(f"max_concurrent_pages must be at least 1, got {self.max_concurrent_pages}")

    @classmethod
    def from_env(cls) -> "BuildConfig":
        """Build a config from GRAPHDOC_* environment variables (and a .env file)."""
        load_dotenv()
        defaults = cls()
        return cls(
            concurrent_capabilities=env_bool(
                "GRAPHDOC_CONCURRENT_CAPABILITIES", defaults.concurrent_capabilities
            ),
            max_concurrent_pages=env_int("GRAPHDOC_MAX_CONCURRENT_PAGES", defaults.max_concurrent_pages),
            skip_introspection_types=env_bool(
                "GRAPHDOC_SKIP_INTROSPECTION_TYPES", defaults.skip_introspection_types
            ),
            continue_on_page_error=env_bool(
                "GRAPHDOC_CONTINUE_ON_PAGE_ERROR", defaults.continue_on_page_error
            ),
            dedupe_navigations=env_bool("GRAPHDOC_DEDUPE_NAVIGATIONS", defaults.dedupe_navigations),
        )


@dataclass
class BuildResult:
    """Result of a documentation build."""

    assets: list[str] = field(default_factory=list)
    pages: list[PageResult] = field(default_factory=list)
    warnings: list[PluginExecutionError] = field(default_factory=list)
    # Pages that were not produced, keyed by build_for_type (None = index)
    failed_pages: dict[Optional[str], InvalidTypeRefError] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failed_pages

    @property
    def warning_count(self) -> int:
        return len(self.warnings)


PluginSource = Union[PluginRegistry, Sequence[PluginConstructor], None]


class DocumentationBuild:
    """
    One build pass over a schema.

    Stages:
        1. Normalize the introspection payload
        2. Instantiate plugins
        3. Collect assets (once, before any page)
        4. Generate pages: index, then each documented type

    A failing plugin call is reported as a warning and contributes nothing;
    it never stops the build. A broken type reference fails only the page
    that hit it.

    Example:
        build = DocumentationBuild(introspection, [MyPlugin, OtherPlugin])
        result = await build.run_async()
        for page in result.pages:
            render(page)
    """

    def __init__(
        self,
        introspection: Introspection,
        plugins: PluginSource = None,
        config: Optional[BuildConfig] = None,
    ):
        self.introspection = introspection
        self.registry = self._as_registry(plugins)
        self.config = config or BuildConfig()

        self.schema: Optional[Schema] = None
        self.instances: list[PluginInstance] = []
        self._assets: Optional[list[str]] = None
        self._asset_warnings: list[PluginExecutionError] = []
        self._assets_lock: Optional[asyncio.Lock] = None

    @staticmethod
    def _as_registry(plugins: PluginSource) -> PluginRegistry:
        if plugins is None:
            return get_registry()
        if isinstance(plugins, PluginRegistry):
            return plugins
        registry = PluginRegistry()
        for constructor in plugins:
            registry.register(constructor)
        return registry

    def run(self) -> BuildResult:
        """Run the build synchronously."""
        return asyncio.run(self.run_async())

    async def run_async(self) -> BuildResult:
        """
        Run the whole build.

        Raises:
            MalformedIntrospectionError: If the payload cannot be normalized
            PluginInitializationError: If a plugin constructor fails
            InvalidTypeRefError: If a page fails and continue_on_page_error is off
        """
        logger.info("Step 1/4: Normalizing introspection...")
        if self.schema is None:
            try:
                self.schema = normalize(self.introspection)
            except MalformedIntrospectionError as e:
                logger.error(f"Build aborted: {e}")
                raise

        logger.info("Step 2/4: Instantiating plugins...")
        self.prepare()
        logger.info(f"  Using plugins: {', '.join(i.name for i in self.instances) or 'none'}")

        logger.info("Step 3/4: Collecting assets...")
        assets = await self.build_assets()
        logger.info(f"  Collected {len(assets)} assets")

        targets = self.page_targets()
        logger.info(f"Step 4/4: Generating {len(targets)} pages...")

        semaphore = asyncio.Semaphore(self.config.max_concurrent_pages)

        async def build_with_semaphore(build_for_type: Optional[str]):
            async with semaphore:
                try:
                    return await self._build_page(build_for_type)
                except InvalidTypeRefError as e:
                    logger.error(f"Page {build_for_type or 'index'} failed: {e}")
                    if not self.config.continue_on_page_error:
                        raise
                    return e

        tasks = [asyncio.ensure_future(build_with_semaphore(target)) for target in targets]
        try:
            outcomes = await asyncio.gather(*tasks)
        except InvalidTypeRefError:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        # Asset warnings are collected once per build; page warnings once per run.
        result = BuildResult(assets=list(assets), warnings=list(self._asset_warnings))
        for target, outcome in zip(targets, outcomes):
            if isinstance(outcome, InvalidTypeRefError):
                result.failed_pages[target] = outcome
                continue
            page, page_warnings = outcome
            result.pages.append(page)
            result.warnings.extend(page_warnings)

        logger.info(
            f"Build complete: {len(result.pages)} pages, "
            f"{len(result.failed_pages)} failed, {result.warning_count} warnings"
        )
        return result

    def prepare(self) -> None:
        """Normalize the introspection and instantiate the plugins (once)."""
        if self.schema is None:
            self.schema = normalize(self.introspection)
        if not self.instances and len(self.registry):
            self.instances = self.registry.instantiate(self.schema)

    def page_targets(self) -> list[Optional[str]]:
        """The index (None) followed by every documented type name, in schema order."""
        self.prepare()
        targets: list[Optional[str]] = [None]
        for schema_type in self.schema.types:
            if self.config.skip_introspection_types and schema_type.is_introspection_type:
                continue
            targets.append(schema_type.name)
        return targets

    async def build_assets(self) -> list[str]:
        """
        Collect the asset paths of every plugin.

        Plugins are asked once per build; later calls return the same list.
        """
        self.prepare()
        if self._assets is not None:
            return self._assets
        if self._assets_lock is None:
            self._assets_lock = asyncio.Lock()

        async with self._assets_lock:
            if self._assets is None:
                calls = [
                    functools.partial(self._call, instance, Capability.ASSETS, ())
                    for instance in self.instances
                    if instance.supports(Capability.ASSETS)
                ]
                outcomes = await self._settle(calls)
                self._assets = merge_assets([values for values, _ in outcomes])
                self._asset_warnings = [error for _, error in outcomes if error is not None]
        return self._assets

    async def build_page(self, build_for_type: Optional[str] = None) -> PageResult:
        """
        Generate one page.

        Plugin failures are logged; they are reported in a BuildResult only
        by run and run_async.

        Raises:
            InvalidTypeRefError: If a plugin hit a broken type reference
        """
        page, _ = await self._build_page(build_for_type)
        return page

    async def _build_page(
        self, build_for_type: Optional[str]
    ) -> tuple[PageResult, list[PluginExecutionError]]:
        await self.build_assets()

        contributions = [PluginContribution(plugin_name=instance.name) for instance in self.instances]
        slots = []
        calls = []
        for capability in PAGE_CAPABILITIES:
            for instance, contribution in zip(self.instances, contributions):
                if not instance.supports(capability):
                    continue
                slots.append((contribution, capability))
                calls.append(functools.partial(
                    self._call, instance, capability, (build_for_type,),
                    page=build_for_type, for_index=build_for_type is None,
                ))

        outcomes = await self._settle(calls)

        page_warnings = []
        for (contribution, capability), (values, error) in zip(slots, outcomes):
            setattr(contribution, capability.value, values)
            if error is not None:
                page_warnings.append(error)

        page = aggregate_page(
            build_for_type, contributions, dedupe_navigations=self.config.dedupe_navigations
        )
        return page, page_warnings

    async def _settle(self, calls: list[Callable[[], Awaitable[CallOutcome]]]) -> list[CallOutcome]:
        """
        Run capability calls and return their outcomes in call order.

        Waits for every call before re-raising a page-fatal error, so no page
        is assembled from a partial set of results.
        """
        if not self.config.concurrent_capabilities:
            return [await call() for call in calls]

        outcomes = await asyncio.gather(*(call() for call in calls), return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        return outcomes

    async def _call(
        self,
        instance: PluginInstance,
        capability: Capability,
        args: tuple,
        page: Optional[str] = None,
        for_index: bool = False,
    ) -> CallOutcome:
        """Invoke one capability, turning failures into a PluginExecutionError."""
        method = getattr(instance.plugin, capability.method)
        label = "index" if for_index else (page or "build")
        logger.debug(f"Calling {instance.name}.{capability.method} for {label}")

        try:
            result = method(*args)
            if inspect.isawaitable(result):
                result = await result
            if not isinstance(result, (list, tuple)):
                raise TypeError(
                    f"{capability.method} must return a list, got {type(result).__name__}"
                )
            return list(result), None
        except InvalidTypeRefError as e:
            # Fatal for the page being built; assets have no page to fail.
            if capability is not Capability.ASSETS:
                raise
            error = PluginExecutionError(instance.name, capability.value, e)
        except Exception as e:
            error = PluginExecutionError(
                instance.name, capability.value, e, page=page, for_index=for_index
            )

        logger.warning(str(error))
        return [], error


def run_build(
    introspection: Introspection,
    plugins: PluginSource = None,
    config: Optional[BuildConfig] = None,
) -> BuildResult:
    """
    Convenience function to run a build.

    Example:
        result = run_build(payload, [MyPlugin])
        if result.warning_count:
            print(f"{result.warning_count} plugin warnings")
    """
    return DocumentationBuild(introspection, plugins, config).run()


async def run_build_async(
    introspection: Introspection,
    plugins: PluginSource = None,
    config: Optional[BuildConfig] = None,
) -> BuildResult:
    """
    Async convenience function to run a build.
    """
    return await DocumentationBuild(introspection, plugins, config).run_async()
