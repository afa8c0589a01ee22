from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from clprobe.core import composite
from clprobe.core.errors import EnumerationError
from clprobe.core.gates import CapabilityGates
from clprobe.core.params import CL_PLATFORM_NOT_FOUND_KHR
from clprobe.core.query import QueryContext, make_failure
from clprobe.core.tables import (
    DEVICE_TRAITS,
    LOADER_TRAITS,
    MEMORY_STEPS,
    MISC_STEPS,
    PLATFORM_TRAITS,
    QUEUE_STEPS,
    Step,
)
from clprobe.core.traits import TraitDescriptor, make_line, trait_line
from clprobe.infra.driver import DriverError
from clprobe.schemas.report import DeviceSection, PlatformSection, ProbeReport, ReportLine
from clprobe.schemas.result import QueryResult

logger = logging.getLogger(__name__)


class DeviceState(Enum):
    INIT = "init"
    ROW_ITERATION = "row_iteration"
    PARTITION_SUMMARY = "partition_summary"
    WORKGROUP_PROBE = "workgroup_probe"
    VECTOR_WIDTHS = "vector_widths"
    FP_CONFIG = "fp_config"
    MEMORY_SECTIONS = "memory_sections"
    QUEUE_CAPS = "queue_caps"
    MISC_AVAILABILITY = "misc_availability"
    EXTENSIONS_OUTPUT = "extensions_output"
    DONE = "done"


DEVICE_STATE_ORDER: tuple[DeviceState, ...] = tuple(DeviceState)


def evaluate_trait(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
) -> ReportLine | None:
    """Gate, render, feed the gates, then decide whether the row is reported."""
    gate_open = trait.applies(gates)
    if not ctx.attempt(gate_open):
        return None
    result = trait.render(ctx, handle, trait, gates)
    if result.ok and trait.feeds is not None:
        trait.feeds(gates, result.value)
    if not ctx.keep(gate_open, result):
        return None
    return trait_line(ctx, trait, result)


def run_steps(
    ctx: QueryContext, handle: Any, steps: Iterable[Step], gates: CapabilityGates
) -> list[ReportLine]:
    lines: list[ReportLine] = []
    for step in steps:
        if isinstance(step, TraitDescriptor):
            line = evaluate_trait(ctx, handle, step, gates)
            if line is not None:
                lines.append(line)
        else:
            lines.extend(step(ctx, handle, gates))
    return lines


class DeviceTraversal:
    """Walks one device through the fixed sequence of report sections."""

    def __init__(
        self,
        ctx: QueryContext,
        handle: Any,
        traits: tuple[TraitDescriptor, ...] = DEVICE_TRAITS,
    ) -> None:
        self.ctx = ctx
        self.handle = handle
        self.traits = traits
        self.gates = CapabilityGates()
        self.state = DeviceState.INIT
        self.lines: list[ReportLine] = []
        self.deferred: list[ReportLine] = []
        self._handlers: dict[DeviceState, Callable[[], None]] = {
            DeviceState.ROW_ITERATION: self._rows,
            DeviceState.PARTITION_SUMMARY: self._composite(composite.partition_summary),
            DeviceState.WORKGROUP_PROBE: self._composite(composite.work_group_probe),
            DeviceState.VECTOR_WIDTHS: self._composite(composite.vector_widths),
            DeviceState.FP_CONFIG: self._composite(composite.fp_config),
            DeviceState.MEMORY_SECTIONS: self._section(MEMORY_STEPS),
            DeviceState.QUEUE_CAPS: self._section(QUEUE_STEPS),
            DeviceState.MISC_AVAILABILITY: self._section(MISC_STEPS),
            DeviceState.EXTENSIONS_OUTPUT: self._extensions,
            DeviceState.DONE: self._release,
        }

    @property
    def done(self) -> bool:
        return self.state is DeviceState.DONE

    def advance(self) -> DeviceState:
        if self.done:
            return self.state
        self.state = DEVICE_STATE_ORDER[DEVICE_STATE_ORDER.index(self.state) + 1]
        logger.debug("device %s: entering %s", self.handle, self.state.value)
        self._handlers[self.state]()
        return self.state

    def run(self) -> DeviceSection:
        while not self.done:
            self.advance()
        return DeviceSection(lines=list(self.lines))

    def _rows(self) -> None:
        for trait in self.traits:
            line = evaluate_trait(self.ctx, self.handle, trait, self.gates)
            if line is None:
                continue
            if trait.deferred:
                self.deferred.append(line)
            else:
                self.lines.append(line)

    def _composite(self, section: composite.Composite) -> Callable[[], None]:
        def handler() -> None:
            self.lines.extend(section(self.ctx, self.handle, self.gates))

        return handler

    def _section(self, steps: tuple[Step, ...]) -> Callable[[], None]:
        def handler() -> None:
            self.lines.extend(run_steps(self.ctx, self.handle, steps, self.gates))

        return handler

    def _extensions(self) -> None:
        self.lines.extend(self.deferred)

    def _release(self) -> None:
        self.deferred.clear()


def walk_device(ctx: QueryContext, handle: Any) -> DeviceSection:
    return DeviceTraversal(ctx, handle).run()


def enumerate_platforms(ctx: QueryContext) -> list[Any]:
    try:
        return list(ctx.driver.platform_ids())
    except DriverError as exc:
        # The ICD loader reports "no platforms" with its own status code.
        if exc.code == CL_PLATFORM_NOT_FOUND_KHR:
            return []
        raise EnumerationError("get number of platforms", exc.code) from exc


def enumerate_devices(ctx: QueryContext, platforms: list[Any]) -> tuple[list[Any], list[int]]:
    """All device handles in one list plus the per-platform counts that slice it."""
    handles: list[Any] = []
    counts: list[int] = []
    for platform in platforms:
        try:
            devices = list(ctx.driver.device_ids(platform))
        except DriverError as exc:
            if not exc.not_found:
                raise EnumerationError("get number of devices", exc.code) from exc
            devices = []
        handles.extend(devices)
        counts.append(len(devices))
    return handles, counts


def _platform_name(ctx: QueryContext, lines: list[ReportLine], platform: Any) -> str:
    for line in lines:
        if line.symbol == "CL_PLATFORM_NAME" and not line.failed:
            return line.text
    result = ctx.string("platform", platform, PLATFORM_TRAITS[0].param, "CL_PLATFORM_NAME")
    return result.text


def walk_platform(
    ctx: QueryContext, platform: Any, gates: CapabilityGates | None = None
) -> PlatformSection:
    gates = gates if gates is not None else CapabilityGates()
    lines = run_steps(ctx, platform, PLATFORM_TRAITS, gates)
    return PlatformSection(name=_platform_name(ctx, lines, platform), lines=lines)


def walk_offline_devices(
    ctx: QueryContext, platform: Any, section: PlatformSection, gates: CapabilityGates
) -> None:
    """Devices reachable only through an offline-devices context, after the online ones."""
    gate_open = gates.has_amd_offline
    if not ctx.attempt(gate_open):
        return
    try:
        devices = list(ctx.driver.offline_device_ids(platform))
    except DriverError as exc:
        logger.debug("offline devices unavailable: %s", exc)
        devices = []
        result = QueryResult.failed(make_failure(exc.routine, "#OFFDEVICES", exc.code))
    else:
        result = QueryResult.success(len(devices))
    if not ctx.keep(gate_open, result):
        return
    section.offline = make_line(
        ctx, "Number of offline devices (AMD)", "#OFFDEVICES", result, indent=0
    )
    for device in devices:
        section.offline_devices.append(walk_device(ctx, device))


def collect_loader(ctx: QueryContext) -> list[ReportLine]:
    return run_steps(ctx, None, LOADER_TRAITS, CapabilityGates())


def _slices(handles: list[Any], counts: list[int]) -> Iterable[list[Any]]:
    offset = 0
    for count in counts:
        yield handles[offset : offset + count]
        offset += count


def collect_report(ctx: QueryContext) -> ProbeReport:
    platforms = enumerate_platforms(ctx)
    logger.debug("found %d platform(s)", len(platforms))
    report = ProbeReport(platform_count=len(platforms))
    platform_gates: list[CapabilityGates] = []
    for platform in platforms:
        gates = CapabilityGates()
        report.platforms.append(walk_platform(ctx, platform, gates))
        platform_gates.append(gates)
    handles, counts = enumerate_devices(ctx, platforms)
    sections = zip(platforms, platform_gates, report.platforms, _slices(handles, counts))
    for platform, gates, section, devices in sections:
        section.device_count = len(devices)
        for device in devices:
            section.devices.append(walk_device(ctx, device))
        if ctx.config.offline:
            walk_offline_devices(ctx, platform, section, gates)
    report.loader = collect_loader(ctx)
    return report


def collect_listing(ctx: QueryContext) -> ProbeReport:
    """Platform and device names only."""
    platforms = enumerate_platforms(ctx)
    report = ProbeReport(platform_count=len(platforms))
    handles, counts = enumerate_devices(ctx, platforms)
    name_trait = DEVICE_TRAITS[0]
    gates = CapabilityGates()
    for platform, devices in zip(platforms, _slices(handles, counts)):
        section = PlatformSection(
            name=_platform_name(ctx, [], platform), device_count=len(devices)
        )
        for device in devices:
            result = name_trait.render(ctx, device, name_trait, gates)
            line = make_line(ctx, name_trait.label, name_trait.symbol, result)
            section.devices.append(DeviceSection(lines=[line]))
        report.platforms.append(section)
    return report
