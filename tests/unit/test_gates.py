from __future__ import annotations

import pytest

from clprobe.core.gates import CapabilityGates, parse_version_ordinal
from clprobe.core.params import CL_DEVICE_TYPE_GPU


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("OpenCL 1.1 Vendor Build", 11),
        ("OpenCL 1.2 CUDA 12.4", 12),
        ("OpenCL 2.0 AMD-APP (3444.0)", 20),
        ("OpenCL 3.0 ", 30),
        ("OpenCL 2 Foo", 20),
        ("OpenCL Something else", 10),
        ("", 10),
    ],
)
def test_parse_version_ordinal(text: str, expected: int) -> None:
    assert parse_version_ordinal(text) == expected


def test_parse_version_ordinal_with_custom_prefix() -> None:
    assert parse_version_ordinal("OpenCL C 2.0", prefix_length=9) == 20


def test_gates_start_zeroed() -> None:
    gates = CapabilityGates()
    assert gates.version == 0
    assert not gates.is_11
    assert not gates.is_gpu
    assert not gates.has_svm


def test_version_feeds_ordinal_predicates() -> None:
    gates = CapabilityGates()
    gates.feed_version("OpenCL 1.1 Vendor Build")
    assert gates.version == 11
    assert gates.is_11
    assert not gates.is_12
    assert not gates.is_20


def test_vendor_gpu_gate_needs_both_signals() -> None:
    gates = CapabilityGates()
    gates.feed_extensions("cl_khr_fp64 cl_amd_device_attribute_query")
    assert gates.has_amd
    assert not gates.is_amd_gpu
    gates.feed_device_type(CL_DEVICE_TYPE_GPU)
    assert gates.is_amd_gpu
    assert not gates.is_nv_gpu


def test_svm_gate_is_version_or_extension() -> None:
    by_version = CapabilityGates()
    by_version.feed_version("OpenCL 2.0 ")
    assert by_version.has_svm

    by_extension = CapabilityGates()
    by_extension.feed_version("OpenCL 1.2 ")
    by_extension.feed_extensions("cl_arm_shared_virtual_memory")
    assert by_extension.has_svm
    assert by_extension.matched("svm") == "cl_arm_shared_virtual_memory"


def test_double_extension_is_independent_of_version() -> None:
    gates = CapabilityGates()
    gates.feed_version("OpenCL 2.0 ")
    gates.feed_extensions("cl_khr_fp16 cl_khr_icd")
    assert gates.is_20
    assert not gates.has_double
