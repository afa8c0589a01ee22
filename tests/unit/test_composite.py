from __future__ import annotations

import numpy as np

from clprobe.core import params as cl
from clprobe.core.composite import (
    BUILD_LOG_MARKER,
    fp_config,
    partition_summary,
    probe_kernel_source,
    vector_widths,
    work_group_probe,
)
from clprobe.core.gates import CapabilityGates
from clprobe.core.query import QueryContext
from clprobe.infra.config import build_report_config
from clprobe.infra.driver import BuildError, DriverError


def _gates(version: str = "OpenCL 1.2 Fake", extensions: str = "cl_khr_fp64") -> CapabilityGates:
    gates = CapabilityGates()
    gates.feed_version(version)
    gates.feed_extensions(extensions)
    gates.feed_device_type(cl.CL_DEVICE_TYPE_GPU)
    return gates


def _by_symbol(lines, symbol):
    return [line for line in lines if line.symbol == symbol]


def test_no_partition_types_is_none_specified(make_driver, make_device_props) -> None:
    props = make_device_props()
    props[cl.CL_DEVICE_PARTITION_PROPERTIES] = b""
    ctx = QueryContext(make_driver(props))
    lines = partition_summary(ctx, "dev0", _gates())
    [types] = _by_symbol(lines, "CL_DEVICE_PARTITION_PROPERTIES")
    assert types.text == "none specified"


def test_explicit_zero_partition_type_is_none(make_driver, make_device_props) -> None:
    ctx = QueryContext(make_driver(make_device_props()))
    lines = partition_summary(ctx, "dev0", _gates())
    assert lines[0].label == "Device Partition"
    assert lines[0].text == "(core)"
    [types] = _by_symbol(lines, "CL_DEVICE_PARTITION_PROPERTIES")
    assert types.text == "none"
    assert types.indent == 2


def test_partition_types_are_joined_with_separator(make_driver, make_device_props, encode) -> None:
    props = make_device_props()
    props[cl.CL_DEVICE_PARTITION_PROPERTIES] = encode.array(
        [cl.CL_DEVICE_PARTITION_EQUALLY, cl.CL_DEVICE_PARTITION_BY_COUNTS], np.intp
    )
    props[cl.CL_DEVICE_PARTITION_AFFINITY_DOMAIN] = encode.ulong((1 << 0) | (1 << 3))
    config = build_report_config(raw=False, separator=" / ")
    ctx = QueryContext(make_driver(props), config)
    lines = partition_summary(ctx, "dev0", _gates())
    [types] = _by_symbol(lines, "CL_DEVICE_PARTITION_PROPERTIES")
    [domains] = _by_symbol(lines, "CL_DEVICE_PARTITION_AFFINITY_DOMAIN")
    assert types.text == "equally / by counts"
    assert domains.text == "NUMA / L2 cache"


def test_fission_extension_partition_on_pre_12_device(
    make_driver, make_device_props, encode
) -> None:
    props = make_device_props(version="OpenCL 1.1 Fake", extensions="cl_ext_device_fission")
    props[cl.CL_DEVICE_PARTITION_TYPES_EXT] = encode.array(
        [cl.CL_DEVICE_PARTITION_EQUALLY_EXT, cl.CL_DEVICE_PARTITION_BY_COUNTS_EXT, 0],
        np.uint64,
    )
    props[cl.CL_DEVICE_AFFINITY_DOMAINS_EXT] = encode.array([], np.uint64)
    driver = make_driver(props)
    ctx = QueryContext(driver)
    lines = partition_summary(
        ctx, "dev0", _gates("OpenCL 1.1 Fake", "cl_ext_device_fission")
    )
    assert lines[0].text == "(cl_ext_device_fission)"
    assert _by_symbol(lines, "CL_DEVICE_PARTITION_TYPES_EXT")[0].text == "equally, by counts"
    assert _by_symbol(lines, "CL_DEVICE_AFFINITY_DOMAINS_EXT")[0].text == "none specified"
    assert not driver.queried(cl.CL_DEVICE_PARTITION_MAX_SUB_DEVICES)


def test_fission_affinity_domains_stop_at_leading_zero(
    make_driver, make_device_props, encode
) -> None:
    props = make_device_props(version="OpenCL 1.1 Fake", extensions="cl_ext_device_fission")
    props[cl.CL_DEVICE_PARTITION_TYPES_EXT] = encode.array([0], np.uint64)
    props[cl.CL_DEVICE_AFFINITY_DOMAINS_EXT] = encode.array([0], np.uint64)
    ctx = QueryContext(make_driver(props))
    lines = partition_summary(
        ctx, "dev0", _gates("OpenCL 1.1 Fake", "cl_ext_device_fission")
    )
    assert _by_symbol(lines, "CL_DEVICE_PARTITION_TYPES_EXT")[0].text == "none"
    [domains] = _by_symbol(lines, "CL_DEVICE_AFFINITY_DOMAINS_EXT")
    assert domains.text == "none specified"
    assert "unknown" not in domains.text


def test_fission_affinity_domains_drop_trailing_zero(
    make_driver, make_device_props, encode
) -> None:
    props = make_device_props(version="OpenCL 1.1 Fake", extensions="cl_ext_device_fission")
    props[cl.CL_DEVICE_PARTITION_TYPES_EXT] = encode.array([0], np.uint64)
    props[cl.CL_DEVICE_AFFINITY_DOMAINS_EXT] = encode.array(
        [cl.CL_AFFINITY_DOMAIN_L1_CACHE_EXT, cl.CL_AFFINITY_DOMAIN_NUMA_EXT, 0], np.uint64
    )
    ctx = QueryContext(make_driver(props))
    lines = partition_summary(
        ctx, "dev0", _gates("OpenCL 1.1 Fake", "cl_ext_device_fission")
    )
    assert _by_symbol(lines, "CL_DEVICE_AFFINITY_DOMAINS_EXT")[0].text == "L1 cache, NUMA"


def test_partition_header_without_any_scheme(make_driver, make_device_props) -> None:
    driver = make_driver(make_device_props(version="OpenCL 1.1 Fake"))
    lines = partition_summary(QueryContext(driver), "dev0", _gates("OpenCL 1.1 Fake", ""))
    assert [line.text for line in lines] == ["(n/a)"]
    assert driver.calls == []


def test_probe_reports_preferred_multiple(make_driver, make_device_props) -> None:
    driver = make_driver(make_device_props(), probe=64)
    [line] = work_group_probe(QueryContext(driver), "dev0", _gates())
    assert line.text == "64"
    device, source, kernel_name = driver.probed[0]
    assert device == "dev0"
    assert kernel_name == "sum"
    assert source == probe_kernel_source()
    assert "dst[i] = src1[i] + src2[i];" in source


def test_probe_build_failure_goes_to_diagnostics(make_driver, make_device_props) -> None:
    error = BuildError(cl.CL_BUILD_PROGRAM_FAILURE, "build program", "error: unknown type")
    driver = make_driver(make_device_props(), probe=error)
    diagnostics: list[str] = []
    ctx = QueryContext(driver, diagnostic=diagnostics.append)
    [line] = work_group_probe(ctx, "dev0", _gates())
    assert line.failed
    assert line.text.endswith("build program : error -11>")
    assert diagnostics == [f"{BUILD_LOG_MARKER}\nerror: unknown type"]


def test_probe_context_failure_is_inline_only(make_driver, make_device_props) -> None:
    driver = make_driver(make_device_props(), probe=DriverError(-6, "create context"))
    diagnostics: list[str] = []
    ctx = QueryContext(driver, diagnostic=diagnostics.append)
    [line] = work_group_probe(ctx, "dev0", _gates())
    assert line.failed
    assert "create context : error -6" in line.text
    assert diagnostics == []


def test_vector_widths_show_enabling_extension(make_driver, make_device_props) -> None:
    ctx = QueryContext(make_driver(make_device_props()))
    lines = vector_widths(ctx, "dev0", _gates())
    by_label = {line.label: line.text.strip() for line in lines[1:]}
    assert lines[0].label == "Preferred / native vector sizes"
    assert by_label["char"] == "4 / 4"
    assert by_label["half"] == "0 / 0       (n/a)"
    assert by_label["double"] == "1 / 1       (cl_khr_fp64)"


def test_native_widths_need_opencl_11(make_driver, make_device_props) -> None:
    driver = make_driver(make_device_props(version="OpenCL 1.0 Fake"))
    lines = vector_widths(QueryContext(driver), "dev0", _gates("OpenCL 1.0 Fake", ""))
    by_label = {line.label: line.text.strip() for line in lines[1:]}
    assert by_label["int"] == "1 / n/a"
    assert not driver.queried(cl.CL_DEVICE_NATIVE_VECTOR_WIDTH_INT)
    assert not driver.queried(cl.CL_DEVICE_PREFERRED_VECTOR_WIDTH_HALF)


def test_vector_widths_raw_mode_emits_separate_lines(make_driver, make_device_props) -> None:
    ctx = QueryContext(make_driver(make_device_props()), build_report_config(raw=True))
    lines = vector_widths(ctx, "dev0", _gates())
    assert len(lines) == 14
    assert lines[0].label == "CL_DEVICE_PREFERRED_VECTOR_WIDTH_CHAR"
    assert lines[1].label == "CL_DEVICE_NATIVE_VECTOR_WIDTH_CHAR"


def test_fp_config_blocks(make_driver, make_device_props) -> None:
    ctx = QueryContext(make_driver(make_device_props()))
    lines = fp_config(ctx, "dev0", _gates())
    headers = [line for line in lines if line.indent == 1]
    assert [line.symbol for line in headers] == [
        "CL_DEVICE_SINGLE_FP_CONFIG",
        "CL_DEVICE_DOUBLE_FP_CONFIG",
    ]
    assert headers[0].text == "(core)"
    assert headers[1].text == "(cl_khr_fp64)"
    assert len(lines) == 1 + 8 + 1 + 7
    single = {line.symbol: line.text for line in lines[1:9]}
    assert single["CL_FP_DENORM"] == "No"
    assert single["CL_FP_INF_NAN"] == "Yes"
    assert single["CL_FP_SOFT_FLOAT"] == "No"
    assert single["CL_FP_CORRECTLY_ROUNDED_DIVIDE_SQRT"] == "Yes"
    double = [line.symbol for line in lines[10:]]
    assert "CL_FP_CORRECTLY_ROUNDED_DIVIDE_SQRT" not in double


def test_half_fp_config_needs_fp16(make_driver, make_device_props, encode) -> None:
    props = make_device_props(extensions="cl_khr_fp16")
    props[cl.CL_DEVICE_HALF_FP_CONFIG] = encode.ulong(1 << 2)
    ctx = QueryContext(make_driver(props))
    lines = fp_config(ctx, "dev0", _gates(extensions="cl_khr_fp16"))
    assert lines[0].symbol == "CL_DEVICE_HALF_FP_CONFIG"
    assert lines[0].text == "(cl_khr_fp16)"
