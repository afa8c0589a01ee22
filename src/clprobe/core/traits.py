from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np

from clprobe.core.formatting import (
    decode_bitmask,
    format_bool,
    format_enum,
    format_mem_size,
)
from clprobe.core.gates import CapabilityGates
from clprobe.core.params import (
    CL_DEVICE_TOPOLOGY_TYPE_PCIE_AMD,
    CL_INVALID_VALUE,
    DEVICE_TYPE_FLAGS,
)
from clprobe.core.query import (
    CL_BOOL,
    CL_INT,
    CL_UINT,
    CL_ULONG,
    SIZE_T,
    QueryContext,
    make_failure,
)
from clprobe.infra.driver import InfoKind
from clprobe.schemas.report import ReportLine
from clprobe.schemas.result import QueryResult

Gate = Callable[[CapabilityGates], bool]
Feeder = Callable[[CapabilityGates, Any], None]
Renderer = Callable[[QueryContext, Any, "TraitDescriptor", CapabilityGates], QueryResult]


@dataclass(frozen=True)
class TraitDescriptor:
    """One row of a trait table: what to query, how to render it and when it applies."""

    param: int
    symbol: str
    label: str
    render: Renderer
    unit: str = ""
    gate: Gate | None = None
    feeds: Feeder | None = None
    kind: InfoKind = "device"
    # Evaluated in table order but printed at the end of the traversal.
    deferred: bool = False
    indent: int = 1

    def applies(self, gates: CapabilityGates) -> bool:
        return self.gate is None or self.gate(gates)


def make_line(
    ctx: QueryContext,
    label: str,
    symbol: str,
    result: QueryResult | str,
    *,
    indent: int = 1,
    unit: str = "",
) -> ReportLine:
    if isinstance(result, str):
        text, failed = result, False
    elif result.ok:
        text, failed = result.text + ("" if ctx.raw else unit), False
    else:
        text, failed = result.text, True
    return ReportLine(
        label=symbol if ctx.raw else label,
        symbol=symbol,
        text=text,
        indent=indent,
        failed=failed,
    )


def trait_line(ctx: QueryContext, trait: TraitDescriptor, result: QueryResult) -> ReportLine:
    return make_line(
        ctx, trait.label, trait.symbol, result, indent=trait.indent, unit=trait.unit
    )


def _scalar(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, dtype: np.dtype
) -> QueryResult:
    return ctx.scalar(trait.kind, handle, trait.param, trait.symbol, dtype)


def _restyle(result: QueryResult, text: Callable[[Any], str]) -> QueryResult:
    if not result.ok:
        return result
    return QueryResult.success(result.value, text(result.value))


def render_string(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
) -> QueryResult:
    return ctx.string(trait.kind, handle, trait.param, trait.symbol)


def render_uint(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
) -> QueryResult:
    return _scalar(ctx, handle, trait, CL_UINT)


def render_int(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
) -> QueryResult:
    return _scalar(ctx, handle, trait, CL_INT)


def render_ulong(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
) -> QueryResult:
    return _scalar(ctx, handle, trait, CL_ULONG)


def render_size(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
) -> QueryResult:
    return _scalar(ctx, handle, trait, SIZE_T)


def render_hex(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
) -> QueryResult:
    return _restyle(_scalar(ctx, handle, trait, CL_UINT), lambda value: f"0x{value:x}")


def render_bool(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
) -> QueryResult:
    result = _scalar(ctx, handle, trait, CL_BOOL)
    if not result.ok:
        return result
    return QueryResult.success(bool(result.value), format_bool(result.value, raw=ctx.raw))


def mem_size(dtype: np.dtype = CL_ULONG) -> Renderer:
    def render_mem_size(
        ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
    ) -> QueryResult:
        return _restyle(
            _scalar(ctx, handle, trait, dtype),
            lambda value: format_mem_size(value, raw=ctx.raw),
        )

    return render_mem_size


def bitfield(flags: tuple[tuple[int, str, str], ...], dtype: np.dtype = CL_ULONG) -> Renderer:
    def render_bitfield(
        ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
    ) -> QueryResult:
        return _restyle(
            _scalar(ctx, handle, trait, dtype),
            lambda mask: decode_bitmask(mask, flags, ctx.separator, raw=ctx.raw),
        )

    return render_bitfield


render_device_type = bitfield(DEVICE_TYPE_FLAGS)


def enum(table: dict[int, tuple[str, str]], dtype: np.dtype = CL_UINT) -> Renderer:
    def render_enum(
        ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
    ) -> QueryResult:
        return _restyle(
            _scalar(ctx, handle, trait, dtype),
            lambda value: format_enum(value, table, raw=ctx.raw),
        )

    return render_enum


def render_size_array(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
) -> QueryResult:
    result = ctx.array(trait.kind, handle, trait.param, trait.symbol, SIZE_T)
    return _restyle(result, lambda values: "x".join(str(value) for value in values))


def render_free_memory_amd(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
) -> QueryResult:
    """Free memory per memory pool, reported by the driver in KiB."""
    result = ctx.array(trait.kind, handle, trait.param, trait.symbol, SIZE_T)
    return _restyle(
        result,
        lambda values: ctx.separator.join(
            format_mem_size(value * 1024, raw=ctx.raw) for value in values
        ),
    )


def version_pair(minor_param: int, minor_symbol: str) -> Renderer:
    """Two scalar queries joined as "major.minor" (NV compute capability, AMD GFXIP)."""

    def render_version_pair(
        ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
    ) -> QueryResult:
        major = _scalar(ctx, handle, trait, CL_UINT)
        if not major.ok:
            return major
        minor = ctx.scalar(trait.kind, handle, minor_param, minor_symbol, CL_UINT)
        if not minor.ok:
            return minor
        return QueryResult.success(
            (major.value, minor.value), f"{major.value}.{minor.value}"
        )

    return render_version_pair


def image_dims(*extra: tuple[int, str]) -> Renderer:
    """Image limits spread over several size_t queries, shown as "WxH[xD]"."""

    def render_image_dims(
        ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
    ) -> QueryResult:
        values: list[int] = []
        for param, symbol in ((trait.param, trait.symbol), *extra):
            result = ctx.scalar(trait.kind, handle, param, symbol, SIZE_T)
            if not result.ok:
                return result
            values.append(result.value)
        return QueryResult.success(tuple(values), "x".join(str(value) for value in values))

    return render_image_dims


def render_topology_amd(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
) -> QueryResult:
    result = ctx.array(trait.kind, handle, trait.param, trait.symbol, np.dtype(np.uint8))
    if not result.ok:
        return result
    raw = bytes(result.value)
    if len(raw) < 24:
        return QueryResult.failed(
            make_failure(
                f"get {trait.symbol} (short topology record)", trait.symbol, CL_INVALID_VALUE
            )
        )
    kind = int(np.frombuffer(raw[:4], dtype=CL_UINT)[0])
    if kind != CL_DEVICE_TOPOLOGY_TYPE_PCIE_AMD:
        return QueryResult.success(kind, f"<unknown (type {kind})>")
    bus, device, function = raw[21], raw[22], raw[23]
    return QueryResult.success(
        (bus, device, function), f"PCI-E, {bus:02x}:{device:02x}.{function}"
    )


def render_pci_bus_info(
    ctx: QueryContext, handle: Any, trait: TraitDescriptor, gates: CapabilityGates
) -> QueryResult:
    result = ctx.array(trait.kind, handle, trait.param, trait.symbol, CL_UINT)
    if not result.ok:
        return result
    if len(result.value) != 4:
        return QueryResult.failed(
            make_failure(
                f"get {trait.symbol} (short PCI record)", trait.symbol, CL_INVALID_VALUE
            )
        )
    domain, bus, device, function = result.value
    return QueryResult.success(
        result.value, f"PCI-E, {domain:04x}:{bus:02x}:{device:02x}.{function}"
    )
