from __future__ import annotations

import ctypes
import ctypes.util
import logging
import warnings
from pathlib import Path
from typing import Any

from clprobe.core.errors import LibraryNotFoundError
from clprobe.core.params import (
    CL_BUILD_PROGRAM_FAILURE,
    CL_INVALID_OPERATION,
    CL_INVALID_VALUE,
    CL_SUCCESS,
)
from clprobe.infra.driver import BuildError, DriverError

logger = logging.getLogger(__name__)

OPENCL_LIBRARY_NAME = "OpenCL"
# Exported by the ocl-icd loader only.
ICD_LOADER_INFO_ROUTINE = "clGetICDLoaderInfoOCLICD"

_INFO_ARGTYPES = [
    ctypes.c_void_p,
    ctypes.c_uint32,
    ctypes.c_size_t,
    ctypes.c_void_p,
    ctypes.POINTER(ctypes.c_size_t),
]
_LOADER_ARGTYPES = [
    ctypes.c_uint32,
    ctypes.c_size_t,
    ctypes.c_void_p,
    ctypes.POINTER(ctypes.c_size_t),
]


def load_opencl_library(custom_path: Path | None = None) -> ctypes.CDLL:
    """Load the ICD loader and declare the info entry points it exports."""
    location = str(custom_path) if custom_path is not None else ctypes.util.find_library(
        OPENCL_LIBRARY_NAME
    )
    if not location:
        raise LibraryNotFoundError(OPENCL_LIBRARY_NAME)
    try:
        library = ctypes.CDLL(location)
    except OSError as exc:
        raise LibraryNotFoundError(location) from exc
    for routine in ("clGetPlatformInfo", "clGetDeviceInfo"):
        function = getattr(library, routine)
        function.argtypes = _INFO_ARGTYPES
        function.restype = ctypes.c_int32
    loader = getattr(library, ICD_LOADER_INFO_ROUTINE, None)
    if loader is not None:
        loader.argtypes = _LOADER_ARGTYPES
        loader.restype = ctypes.c_int32
    logger.debug("loaded OpenCL library from %s", location)
    return library


def _handle_pointer(handle: Any) -> ctypes.c_void_p:
    return ctypes.c_void_p(handle.int_ptr)


def _two_call(routine: str, function: Any, leading: tuple, buffer: bytearray | None) -> int:
    size = ctypes.c_size_t(0)
    if buffer is None:
        status = function(*leading, 0, None, ctypes.byref(size))
    else:
        target = (ctypes.c_char * len(buffer)).from_buffer(buffer)
        status = function(*leading, len(buffer), target, ctypes.byref(size))
    if status != CL_SUCCESS:
        raise DriverError(status, routine)
    return size.value


class OpenCLDriver:
    """pyopencl for handles and the kernel probe, ctypes for the size-then-fill info calls."""

    def __init__(self, library_path: Path | None = None) -> None:
        self.library_path = library_path
        self._library: ctypes.CDLL | None = None

    @property
    def library(self) -> ctypes.CDLL:
        if self._library is None:
            self._library = load_opencl_library(self.library_path)
        return self._library

    def platform_ids(self) -> list[Any]:
        import pyopencl as cl

        try:
            return list(cl.get_platforms())
        except cl.Error as exc:
            raise DriverError(exc.code, "clGetPlatformIDs") from exc

    def device_ids(self, platform: Any) -> list[Any]:
        import pyopencl as cl

        try:
            return list(platform.get_devices())
        except cl.Error as exc:
            raise DriverError(exc.code, "clGetDeviceIDs") from exc

    def _info(self, routine: str, handle: Any, param: int, buffer: bytearray | None) -> int:
        function = getattr(self.library, routine)
        return _two_call(routine, function, (_handle_pointer(handle), param), buffer)

    def platform_info(self, platform: Any, param: int, buffer: bytearray | None) -> int:
        return self._info("clGetPlatformInfo", platform, param, buffer)

    def device_info(self, device: Any, param: int, buffer: bytearray | None) -> int:
        return self._info("clGetDeviceInfo", device, param, buffer)

    def loader_info(self, loader: Any, param: int, buffer: bytearray | None) -> int:
        function = getattr(self.library, ICD_LOADER_INFO_ROUTINE, None)
        if function is None:
            raise DriverError(CL_INVALID_OPERATION, ICD_LOADER_INFO_ROUTINE)
        return _two_call(ICD_LOADER_INFO_ROUTINE, function, (param,), buffer)

    def offline_device_ids(self, platform: Any) -> list[Any]:
        """Devices the runtime knows about but that have no hardware attached."""
        import pyopencl as cl

        offline = getattr(cl.context_properties, "OFFLINE_DEVICES_AMD", None)
        if offline is None:
            raise DriverError(CL_INVALID_VALUE, "create offline context")
        try:
            context = cl.Context(
                properties=[(cl.context_properties.PLATFORM, platform), (offline, 1)]
            )
        except cl.Error as exc:
            raise DriverError(exc.code, "create offline context") from exc
        return list(context.devices)

    def preferred_work_group_size_multiple(
        self, device: Any, source: str, kernel_name: str
    ) -> int:
        import pyopencl as cl

        try:
            context = cl.Context([device])
        except cl.Error as exc:
            raise DriverError(exc.code, "create context") from exc
        program = cl.Program(context, source)
        try:
            program.build()
        except cl.Error as exc:
            if exc.code != CL_BUILD_PROGRAM_FAILURE:
                raise DriverError(exc.code, "build program") from exc
            raise BuildError(exc.code, "build program", _build_log(program, device, exc)) from exc
        try:
            kernel = cl.Kernel(program, kernel_name)
            return int(
                kernel.get_work_group_info(
                    cl.kernel_work_group_info.PREFERRED_WORK_GROUP_SIZE_MULTIPLE, device
                )
            )
        except cl.Error as exc:
            raise DriverError(exc.code, "get CL_KERNEL_PREFERRED_WORK_GROUP_SIZE_MULTIPLE") from exc


def _build_log(program: Any, device: Any, error: Exception) -> str:
    # A build that went through the source cache leaves no program object behind;
    # pyopencl folds the log into the error message instead.
    if getattr(program, "_prg", None) is None:
        return str(error)
    import pyopencl as cl

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            return program.get_build_info(device, cl.program_build_info.LOG)
    except cl.Error:
        return str(error)
