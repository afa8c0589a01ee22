from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import numpy as np
import pytest

from clprobe.core import params as cl
from clprobe.infra.driver import DriverError


def _string(text: str) -> bytes:
    return text.encode("utf-8") + b"\0"


def _scalar(value: int, dtype: Any) -> bytes:
    return np.array([value], dtype=dtype).tobytes()


def _array(values: list[int], dtype: Any) -> bytes:
    return np.array(values, dtype=dtype).tobytes()


ENCODE = SimpleNamespace(
    string=_string,
    uint=lambda value: _scalar(value, np.uint32),
    int=lambda value: _scalar(value, np.int32),
    ulong=lambda value: _scalar(value, np.uint64),
    size=lambda value: _scalar(value, np.uintp),
    bool=lambda value: _scalar(int(bool(value)), np.uint32),
    array=_array,
)

FP_DEFAULT = (1 << 1) | (1 << 2) | (1 << 3) | (1 << 4) | (1 << 5)

LOADER_DEFAULT = {
    cl.CL_ICDL_NAME: _string("OpenCL ICD Loader"),
    cl.CL_ICDL_VENDOR: _string("OCL Icd free software"),
    cl.CL_ICDL_VERSION: _string("2.3.2"),
    cl.CL_ICDL_OCL_VERSION: _string("OpenCL 3.0"),
}


class FakeDriver:
    """In-memory OpenCL runtime: handles are plain strings, properties are encoded bytes."""

    def __init__(
        self,
        platform_error: int | None = None,
        device_errors: dict[str, int] | None = None,
        probe: int | Exception = 32,
        loader: dict[int, Any] | None = LOADER_DEFAULT,
        offline_error: int | None = None,
    ) -> None:
        self.platform_props: dict[str, dict[int, Any]] = {}
        self.device_props: dict[str, dict[int, Any]] = {}
        self.devices: dict[str, list[str]] = {}
        self.offline: dict[str, list[str]] = {}
        self.loader = loader
        self.offline_error = offline_error
        self.platform_error = platform_error
        self.device_errors = device_errors or {}
        self.probe = probe
        self.calls: list[tuple[str, str, int]] = []
        self.probed: list[tuple[str, str, str]] = []

    def add_platform(
        self,
        handle: str,
        props: dict[int, Any],
        devices: tuple[tuple[str, dict[int, Any]], ...] = (),
        offline: tuple[tuple[str, dict[int, Any]], ...] = (),
    ) -> FakeDriver:
        self.platform_props[handle] = props
        self.devices[handle] = [device for device, _ in devices]
        self.offline[handle] = [device for device, _ in offline]
        for device, device_props in (*devices, *offline):
            self.device_props[device] = device_props
        return self

    def platform_ids(self) -> list[str]:
        if self.platform_error is not None:
            raise DriverError(self.platform_error, "clGetPlatformIDs")
        return list(self.platform_props)

    def device_ids(self, platform: str) -> list[str]:
        code = self.device_errors.get(platform)
        if code is not None:
            raise DriverError(code, "clGetDeviceIDs")
        devices = self.devices.get(platform, [])
        if not devices:
            raise DriverError(cl.CL_DEVICE_NOT_FOUND, "clGetDeviceIDs")
        return list(devices)

    def _info(
        self,
        kind: str,
        table: dict[str, dict[int, Any]],
        handle: str,
        param: int,
        buffer: bytearray | None,
    ) -> int:
        self.calls.append((kind, handle, param))
        value = table[handle].get(param)
        if value is None:
            raise DriverError(cl.CL_INVALID_VALUE, f"clGet{kind.title()}Info")
        if isinstance(value, DriverError):
            raise value
        if buffer is None:
            return len(value)
        buffer[: len(value)] = value
        return len(value)

    def platform_info(self, platform: str, param: int, buffer: bytearray | None) -> int:
        return self._info("platform", self.platform_props, platform, param, buffer)

    def device_info(self, device: str, param: int, buffer: bytearray | None) -> int:
        return self._info("device", self.device_props, device, param, buffer)

    def loader_info(self, loader: Any, param: int, buffer: bytearray | None) -> int:
        if self.loader is None:
            raise DriverError(cl.CL_INVALID_OPERATION, "clGetICDLoaderInfoOCLICD")
        return self._info("loader", {None: self.loader}, loader, param, buffer)

    def offline_device_ids(self, platform: str) -> list[str]:
        if self.offline_error is not None:
            raise DriverError(self.offline_error, "create offline context")
        return list(self.offline.get(platform, []))

    def preferred_work_group_size_multiple(self, device: str, source: str, kernel_name: str) -> int:
        self.probed.append((device, source, kernel_name))
        if isinstance(self.probe, Exception):
            raise self.probe
        return self.probe

    def queried(self, param: int) -> bool:
        return any(called == param for _, _, called in self.calls)


def platform_props(
    name: str = "Fake Platform",
    version: str = "OpenCL 1.2 Fake",
    extensions: str = "cl_khr_icd",
) -> dict[int, Any]:
    return {
        cl.CL_PLATFORM_NAME: ENCODE.string(name),
        cl.CL_PLATFORM_VENDOR: ENCODE.string("Fake Vendor"),
        cl.CL_PLATFORM_VERSION: ENCODE.string(version),
        cl.CL_PLATFORM_PROFILE: ENCODE.string("FULL_PROFILE"),
        cl.CL_PLATFORM_EXTENSIONS: ENCODE.string(extensions),
        cl.CL_PLATFORM_ICD_SUFFIX_KHR: ENCODE.string("FAKE"),
    }


def device_props(
    name: str = "Fake GPU",
    version: str = "OpenCL 1.2 Fake",
    extensions: str = "cl_khr_fp64 cl_khr_global_int32_base_atomics",
    device_type: int = cl.CL_DEVICE_TYPE_GPU,
) -> dict[int, Any]:
    """Every property a plain OpenCL 1.2 device answers."""
    props: dict[int, Any] = {
        cl.CL_DEVICE_NAME: ENCODE.string(name),
        cl.CL_DEVICE_VENDOR: ENCODE.string("Fake Vendor"),
        cl.CL_DEVICE_VENDOR_ID: ENCODE.uint(0x1234),
        cl.CL_DEVICE_VERSION: ENCODE.string(version),
        cl.CL_DEVICE_EXTENSIONS: ENCODE.string(extensions),
        cl.CL_DRIVER_VERSION: ENCODE.string("1.0.0"),
        cl.CL_DEVICE_OPENCL_C_VERSION: ENCODE.string("OpenCL C 1.2"),
        cl.CL_DEVICE_PROFILE: ENCODE.string("FULL_PROFILE"),
        cl.CL_DEVICE_AVAILABLE: ENCODE.bool(True),
        cl.CL_DEVICE_COMPILER_AVAILABLE: ENCODE.bool(True),
        cl.CL_DEVICE_LINKER_AVAILABLE: ENCODE.bool(True),
        cl.CL_DEVICE_TYPE: ENCODE.ulong(device_type),
        cl.CL_DEVICE_MAX_COMPUTE_UNITS: ENCODE.uint(16),
        cl.CL_DEVICE_MAX_CLOCK_FREQUENCY: ENCODE.uint(1500),
        cl.CL_DEVICE_MAX_WORK_ITEM_DIMENSIONS: ENCODE.uint(3),
        cl.CL_DEVICE_MAX_WORK_ITEM_SIZES: ENCODE.array([1024, 1024, 64], np.uintp),
        cl.CL_DEVICE_MAX_WORK_GROUP_SIZE: ENCODE.size(1024),
        cl.CL_DEVICE_PARTITION_MAX_SUB_DEVICES: ENCODE.uint(0),
        cl.CL_DEVICE_PARTITION_PROPERTIES: ENCODE.array([0], np.intp),
        cl.CL_DEVICE_PARTITION_AFFINITY_DOMAIN: ENCODE.ulong(0),
        cl.CL_DEVICE_SINGLE_FP_CONFIG: ENCODE.ulong(
            FP_DEFAULT | cl.CL_FP_CORRECTLY_ROUNDED_DIVIDE_SQRT
        ),
        cl.CL_DEVICE_DOUBLE_FP_CONFIG: ENCODE.ulong(FP_DEFAULT | 1),
        cl.CL_DEVICE_ADDRESS_BITS: ENCODE.uint(64),
        cl.CL_DEVICE_ENDIAN_LITTLE: ENCODE.bool(True),
        cl.CL_DEVICE_GLOBAL_MEM_SIZE: ENCODE.ulong(4 * 1024**3),
        cl.CL_DEVICE_ERROR_CORRECTION_SUPPORT: ENCODE.bool(False),
        cl.CL_DEVICE_MAX_MEM_ALLOC_SIZE: ENCODE.ulong(1024**3),
        cl.CL_DEVICE_HOST_UNIFIED_MEMORY: ENCODE.bool(False),
        cl.CL_DEVICE_MIN_DATA_TYPE_ALIGN_SIZE: ENCODE.uint(128),
        cl.CL_DEVICE_MEM_BASE_ADDR_ALIGN: ENCODE.uint(1024),
        cl.CL_DEVICE_GLOBAL_MEM_CACHE_TYPE: ENCODE.uint(2),
        cl.CL_DEVICE_GLOBAL_MEM_CACHE_SIZE: ENCODE.ulong(256 * 1024),
        cl.CL_DEVICE_GLOBAL_MEM_CACHELINE_SIZE: ENCODE.uint(64),
        cl.CL_DEVICE_IMAGE_SUPPORT: ENCODE.bool(True),
        cl.CL_DEVICE_MAX_SAMPLERS: ENCODE.uint(16),
        cl.CL_DEVICE_IMAGE_MAX_BUFFER_SIZE: ENCODE.size(134217728),
        cl.CL_DEVICE_IMAGE_MAX_ARRAY_SIZE: ENCODE.size(2048),
        cl.CL_DEVICE_IMAGE_BASE_ADDRESS_ALIGNMENT: ENCODE.uint(256),
        cl.CL_DEVICE_IMAGE_PITCH_ALIGNMENT: ENCODE.uint(256),
        cl.CL_DEVICE_IMAGE2D_MAX_WIDTH: ENCODE.size(16384),
        cl.CL_DEVICE_IMAGE2D_MAX_HEIGHT: ENCODE.size(16384),
        cl.CL_DEVICE_IMAGE3D_MAX_WIDTH: ENCODE.size(2048),
        cl.CL_DEVICE_IMAGE3D_MAX_HEIGHT: ENCODE.size(2048),
        cl.CL_DEVICE_IMAGE3D_MAX_DEPTH: ENCODE.size(2048),
        cl.CL_DEVICE_MAX_READ_IMAGE_ARGS: ENCODE.uint(128),
        cl.CL_DEVICE_MAX_WRITE_IMAGE_ARGS: ENCODE.uint(8),
        cl.CL_DEVICE_LOCAL_MEM_TYPE: ENCODE.uint(1),
        cl.CL_DEVICE_LOCAL_MEM_SIZE: ENCODE.ulong(32768),
        cl.CL_DEVICE_MAX_CONSTANT_BUFFER_SIZE: ENCODE.ulong(65536),
        cl.CL_DEVICE_MAX_CONSTANT_ARGS: ENCODE.uint(8),
        cl.CL_DEVICE_MAX_PARAMETER_SIZE: ENCODE.size(4096),
        cl.CL_DEVICE_QUEUE_PROPERTIES: ENCODE.ulong(0b11),
        cl.CL_DEVICE_PREFERRED_INTEROP_USER_SYNC: ENCODE.bool(True),
        cl.CL_DEVICE_PROFILING_TIMER_RESOLUTION: ENCODE.size(1),
        cl.CL_DEVICE_EXECUTION_CAPABILITIES: ENCODE.ulong(1),
        cl.CL_DEVICE_PRINTF_BUFFER_SIZE: ENCODE.size(1048576),
        cl.CL_DEVICE_BUILT_IN_KERNELS: ENCODE.string(""),
    }
    widths = {"CHAR": 4, "SHORT": 2, "INT": 1, "LONG": 1, "HALF": 0, "FLOAT": 1, "DOUBLE": 1}
    for lane, width in widths.items():
        props[getattr(cl, f"CL_DEVICE_PREFERRED_VECTOR_WIDTH_{lane}")] = ENCODE.uint(width)
        props[getattr(cl, f"CL_DEVICE_NATIVE_VECTOR_WIDTH_{lane}")] = ENCODE.uint(width)
    return props


@pytest.fixture
def encode() -> SimpleNamespace:
    return ENCODE


@pytest.fixture
def make_platform_props():
    return platform_props


@pytest.fixture
def make_device_props():
    return device_props


@pytest.fixture
def make_driver():
    """Build a FakeDriver with one platform holding the given devices."""

    def factory(*devices: dict[int, Any], **options: Any) -> FakeDriver:
        platform = options.pop("platform", None) or platform_props()
        driver = FakeDriver(**options)
        handles = tuple((f"dev{index}", props) for index, props in enumerate(devices))
        return driver.add_platform("plat0", platform, handles)

    return factory


@pytest.fixture
def fake_driver_class() -> type[FakeDriver]:
    return FakeDriver
