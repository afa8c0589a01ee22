from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from clprobe.core import params as cl
from clprobe.core.formatting import decode_bitmask, format_bool
from clprobe.core.gates import CapabilityGates
from clprobe.core.query import CL_BITFIELD, CL_UINT, CL_ULONG, INTPTR_T, QueryContext, make_failure
from clprobe.core.traits import make_line
from clprobe.infra.driver import BuildError, DriverError
from clprobe.schemas.report import ReportLine
from clprobe.schemas.result import QueryResult

logger = logging.getLogger(__name__)

Composite = Callable[[QueryContext, Any, CapabilityGates], list[ReportLine]]

NONE_SPECIFIED = "none specified"
NOT_AVAILABLE = "n/a"
BUILD_LOG_MARKER = "=== CL_PROGRAM_BUILD_LOG ==="
PROBE_KERNEL_NAME = "sum"
PROBE_KERNEL_TEMPLATE = """\
kernel void {name}(global {gentype} * restrict dst,
    global const {gentype} * restrict src1,
    global const {gentype} * restrict src2)
{{
    size_t i = get_global_id(0);
    dst[i] = src1[i] + src2[i];
}}
"""


def probe_kernel_source(gentype: str = "float", name: str = PROBE_KERNEL_NAME) -> str:
    return PROBE_KERNEL_TEMPLATE.format(gentype=gentype, name=name)


def flag_lines(
    ctx: QueryContext,
    mask: int,
    flags: tuple[tuple[int, str, str], ...],
    *,
    indent: int = 2,
    skip: int = 0,
) -> list[ReportLine]:
    """One Yes/No line per flag, in declaration order."""
    return [
        make_line(ctx, label, symbol, format_bool(mask & bit, raw=ctx.raw), indent=indent)
        for bit, label, symbol in flags
        if not bit & skip
    ]


def flag_block(
    ctx: QueryContext,
    handle: Any,
    param: int,
    symbol: str,
    label: str,
    flags: tuple[tuple[int, str, str], ...],
    *,
    annotation: str = "",
    skip: int = 0,
) -> list[ReportLine]:
    """A header line followed by the decoded flags, or the failure in place of the header value."""
    result = ctx.scalar("device", handle, param, symbol, CL_BITFIELD)
    if not result.ok:
        return [make_line(ctx, label, symbol, result)]
    header = make_line(ctx, label, symbol, annotation if not ctx.raw else f"{result.value:#x}")
    return [header, *flag_lines(ctx, result.value, flags, skip=skip)]


# Partitioning


def _partition_names(
    values: tuple[int, ...], table: dict[int, tuple[str, str]], ctx: QueryContext
) -> str:
    names: list[str] = []
    for index, value in enumerate(values):
        # Zero terminates the list, except as the leading entry of a table that names it.
        if value == 0 and (index > 0 or 0 not in table):
            break
        label, symbol = table.get(value, (f"<unknown ({value:#x})>", f"{value:#x}"))
        names.append(symbol if ctx.raw else label)
    if not names:
        return NONE_SPECIFIED
    return ctx.separator.join(names)


def _partition_list(
    ctx: QueryContext,
    handle: Any,
    param: int,
    symbol: str,
    label: str,
    table: dict[int, tuple[str, str]],
    dtype: Any,
) -> ReportLine:
    result = ctx.array("device", handle, param, symbol, dtype)
    if result.ok:
        result = QueryResult.success(result.value, _partition_names(result.value, table, ctx))
    return make_line(ctx, label, symbol, result, indent=2)


def partition_summary(
    ctx: QueryContext, handle: Any, gates: CapabilityGates
) -> list[ReportLine]:
    sources: list[str] = []
    if gates.is_12:
        sources.append("core")
    fission = gates.matched("fission")
    if fission:
        sources.append(fission)
    label = f"({', '.join(sources)})" if sources else f"({NOT_AVAILABLE})"
    lines = [make_line(ctx, "Device Partition", "CL_DEVICE_PARTITION", label)]

    if ctx.attempt(gates.is_12):
        core_lines: list[ReportLine] = []
        result = ctx.scalar(
            "device",
            handle,
            cl.CL_DEVICE_PARTITION_MAX_SUB_DEVICES,
            "CL_DEVICE_PARTITION_MAX_SUB_DEVICES",
            CL_UINT,
        )
        core_lines.append(
            make_line(
                ctx,
                "Max number of sub-devices",
                "CL_DEVICE_PARTITION_MAX_SUB_DEVICES",
                result,
                indent=2,
            )
        )
        core_lines.append(
            _partition_list(
                ctx,
                handle,
                cl.CL_DEVICE_PARTITION_PROPERTIES,
                "CL_DEVICE_PARTITION_PROPERTIES",
                "Supported partition types",
                cl.PARTITION_TYPES,
                INTPTR_T,
            )
        )
        domains = ctx.scalar(
            "device",
            handle,
            cl.CL_DEVICE_PARTITION_AFFINITY_DOMAIN,
            "CL_DEVICE_PARTITION_AFFINITY_DOMAIN",
            CL_BITFIELD,
        )
        if domains.ok:
            decoded = decode_bitmask(
                domains.value, cl.AFFINITY_DOMAIN_FLAGS, ctx.separator, raw=ctx.raw
            )
            domains = QueryResult.success(domains.value, decoded or f"({NOT_AVAILABLE})")
        core_lines.append(
            make_line(
                ctx,
                "Supported affinity domains",
                "CL_DEVICE_PARTITION_AFFINITY_DOMAIN",
                domains,
                indent=2,
            )
        )
        lines.extend(_kept(ctx, gates.is_12, core_lines))

    if ctx.attempt(gates.has_fission):
        ext_lines = [
            _partition_list(
                ctx,
                handle,
                cl.CL_DEVICE_PARTITION_TYPES_EXT,
                "CL_DEVICE_PARTITION_TYPES_EXT",
                "Supported partition types (ext)",
                cl.PARTITION_TYPES_EXT,
                CL_ULONG,
            ),
            _partition_list(
                ctx,
                handle,
                cl.CL_DEVICE_AFFINITY_DOMAINS_EXT,
                "CL_DEVICE_AFFINITY_DOMAINS_EXT",
                "Supported affinity domains (ext)",
                cl.AFFINITY_DOMAINS_EXT,
                CL_ULONG,
            ),
        ]
        lines.extend(_kept(ctx, gates.has_fission, ext_lines))
    return lines


def _kept(ctx: QueryContext, gate_open: bool, lines: list[ReportLine]) -> list[ReportLine]:
    if gate_open or ctx.config.prop_mode == "show":
        return lines
    return [line for line in lines if not line.failed]


# Work-group size probe


def work_group_probe(
    ctx: QueryContext, handle: Any, gates: CapabilityGates
) -> list[ReportLine]:
    """Build a throwaway kernel to learn the compiler's preferred work-group size multiple."""
    label = "Preferred work group size multiple (kernel)"
    symbol = "CL_KERNEL_PREFERRED_WORK_GROUP_SIZE_MULTIPLE"
    try:
        multiple = ctx.driver.preferred_work_group_size_multiple(
            handle, probe_kernel_source(), PROBE_KERNEL_NAME
        )
    except BuildError as exc:
        logger.debug("probe kernel build failed with %s", exc.code)
        ctx.diagnostic(f"{BUILD_LOG_MARKER}\n{exc.log}")
        result = QueryResult.failed(make_failure(exc.routine or "build program", symbol, exc.code))
    except DriverError as exc:
        result = QueryResult.failed(make_failure(exc.routine or "probe kernel", symbol, exc.code))
    else:
        result = QueryResult.success(multiple)
    return [make_line(ctx, label, symbol, result)]


# Vector widths


@dataclass(frozen=True)
class VectorLane:
    name: str
    preferred: int
    native: int
    extension: str | None = None


VECTOR_LANES: tuple[VectorLane, ...] = (
    VectorLane(
        "char",
        cl.CL_DEVICE_PREFERRED_VECTOR_WIDTH_CHAR,
        cl.CL_DEVICE_NATIVE_VECTOR_WIDTH_CHAR,
    ),
    VectorLane(
        "short",
        cl.CL_DEVICE_PREFERRED_VECTOR_WIDTH_SHORT,
        cl.CL_DEVICE_NATIVE_VECTOR_WIDTH_SHORT,
    ),
    VectorLane(
        "int",
        cl.CL_DEVICE_PREFERRED_VECTOR_WIDTH_INT,
        cl.CL_DEVICE_NATIVE_VECTOR_WIDTH_INT,
    ),
    VectorLane(
        "long",
        cl.CL_DEVICE_PREFERRED_VECTOR_WIDTH_LONG,
        cl.CL_DEVICE_NATIVE_VECTOR_WIDTH_LONG,
    ),
    VectorLane(
        "half",
        cl.CL_DEVICE_PREFERRED_VECTOR_WIDTH_HALF,
        cl.CL_DEVICE_NATIVE_VECTOR_WIDTH_HALF,
        "half",
    ),
    VectorLane(
        "float",
        cl.CL_DEVICE_PREFERRED_VECTOR_WIDTH_FLOAT,
        cl.CL_DEVICE_NATIVE_VECTOR_WIDTH_FLOAT,
    ),
    VectorLane(
        "double",
        cl.CL_DEVICE_PREFERRED_VECTOR_WIDTH_DOUBLE,
        cl.CL_DEVICE_NATIVE_VECTOR_WIDTH_DOUBLE,
        "double",
    ),
)


def vector_widths(
    ctx: QueryContext, handle: Any, gates: CapabilityGates
) -> list[ReportLine]:
    lines: list[ReportLine] = []
    if not ctx.raw:
        lines.append(
            make_line(ctx, "Preferred / native vector sizes", "CL_DEVICE_VECTOR_WIDTHS", "")
        )
    for lane in VECTOR_LANES:
        upper = lane.name.upper()
        preferred_symbol = f"CL_DEVICE_PREFERRED_VECTOR_WIDTH_{upper}"
        native_symbol = f"CL_DEVICE_NATIVE_VECTOR_WIDTH_{upper}"
        # Half preferences and all native widths arrived with OpenCL 1.1.
        needs_11 = lane.name == "half"
        if needs_11 and not ctx.attempt(gates.is_11):
            preferred = QueryResult.success(0)
        else:
            preferred = ctx.scalar("device", handle, lane.preferred, preferred_symbol, CL_UINT)
        if ctx.attempt(gates.is_11):
            native = ctx.scalar("device", handle, lane.native, native_symbol, CL_UINT)
        else:
            native = QueryResult.success(0, NOT_AVAILABLE)

        if ctx.raw:
            lines.append(make_line(ctx, lane.name, preferred_symbol, preferred, indent=1))
            lines.append(make_line(ctx, lane.name, native_symbol, native, indent=1))
            continue
        failure = next((res for res in (preferred, native) if not res.ok), None)
        if failure is not None:
            lines.append(make_line(ctx, lane.name, preferred_symbol, failure, indent=2))
            continue
        text = f"{preferred.text:>8} / {native.text:<8}"
        if lane.extension is not None:
            text += f"({gates.matched(lane.extension) or NOT_AVAILABLE})"
        lines.append(make_line(ctx, lane.name, preferred_symbol, text.rstrip(), indent=2))
    return lines


# Floating-point configuration


@dataclass(frozen=True)
class Precision:
    label: str
    param: int
    symbol: str
    extension: str | None
    applies: Callable[[CapabilityGates], bool]


PRECISIONS: tuple[Precision, ...] = (
    Precision(
        "Half-precision Floating-point support",
        cl.CL_DEVICE_HALF_FP_CONFIG,
        "CL_DEVICE_HALF_FP_CONFIG",
        "half",
        lambda gates: gates.has_half,
    ),
    Precision(
        "Single-precision Floating-point support",
        cl.CL_DEVICE_SINGLE_FP_CONFIG,
        "CL_DEVICE_SINGLE_FP_CONFIG",
        None,
        lambda gates: True,
    ),
    Precision(
        "Double-precision Floating-point support",
        cl.CL_DEVICE_DOUBLE_FP_CONFIG,
        "CL_DEVICE_DOUBLE_FP_CONFIG",
        "double",
        lambda gates: gates.has_double or gates.is_12,
    ),
)


def fp_config(ctx: QueryContext, handle: Any, gates: CapabilityGates) -> list[ReportLine]:
    lines: list[ReportLine] = []
    for precision in PRECISIONS:
        gate_open = precision.applies(gates)
        if not ctx.attempt(gate_open):
            continue
        source = "core"
        if precision.extension is not None:
            source = gates.matched(precision.extension) or "core"
        # Only single precision reports correctly-rounded divide and sqrt.
        skip = 0 if precision.extension is None else cl.CL_FP_CORRECTLY_ROUNDED_DIVIDE_SQRT
        block = flag_block(
            ctx,
            handle,
            precision.param,
            precision.symbol,
            precision.label,
            cl.FP_CONFIG_FLAGS,
            annotation=f"({source})",
            skip=skip,
        )
        lines.extend(_kept(ctx, gate_open, block))
    return lines


# Sections embedded in the memory/queue/availability tables


def svm_summary(ctx: QueryContext, handle: Any, gates: CapabilityGates) -> list[ReportLine]:
    """SVM is core from 2.0 and offered earlier through an ARM extension."""
    if not ctx.attempt(gates.has_svm):
        return []
    if gates.is_20 or not gates.matched("svm"):
        param, symbol, source = cl.CL_DEVICE_SVM_CAPABILITIES, "CL_DEVICE_SVM_CAPABILITIES", "core"
    else:
        param, symbol = cl.CL_DEVICE_SVM_CAPABILITIES_ARM, "CL_DEVICE_SVM_CAPABILITIES_ARM"
        source = gates.matched("svm") or "core"
    block = flag_block(
        ctx,
        handle,
        param,
        symbol,
        "Shared Virtual Memory (SVM) capabilities",
        cl.SVM_CAPABILITY_FLAGS,
        annotation=f"({source})",
    )
    return _kept(ctx, gates.has_svm, block)


def queue_properties(ctx: QueryContext, handle: Any, gates: CapabilityGates) -> list[ReportLine]:
    label = "Queue properties (on host)" if gates.is_20 else "Queue properties"
    return flag_block(
        ctx,
        handle,
        cl.CL_DEVICE_QUEUE_PROPERTIES,
        "CL_DEVICE_QUEUE_PROPERTIES",
        label,
        cl.QUEUE_PROPERTY_FLAGS,
    )


def device_queue_properties(
    ctx: QueryContext, handle: Any, gates: CapabilityGates
) -> list[ReportLine]:
    if not ctx.attempt(gates.is_20):
        return []
    block = flag_block(
        ctx,
        handle,
        cl.CL_DEVICE_QUEUE_ON_DEVICE_PROPERTIES,
        "CL_DEVICE_QUEUE_ON_DEVICE_PROPERTIES",
        "Queue properties (on device)",
        cl.QUEUE_PROPERTY_FLAGS,
    )
    return _kept(ctx, gates.is_20, block)


def execution_capabilities(
    ctx: QueryContext, handle: Any, gates: CapabilityGates
) -> list[ReportLine]:
    return flag_block(
        ctx,
        handle,
        cl.CL_DEVICE_EXECUTION_CAPABILITIES,
        "CL_DEVICE_EXECUTION_CAPABILITIES",
        "Execution capabilities",
        cl.EXEC_CAPABILITY_FLAGS,
    )
