from __future__ import annotations

from typing import Any, Literal, Protocol

from clprobe.core.params import CL_DEVICE_NOT_FOUND

InfoKind = Literal["platform", "device", "loader"]


class DriverError(Exception):
    """Non-success status returned by an OpenCL entry point."""

    def __init__(self, code: int, routine: str = "") -> None:
        super().__init__(f"{routine or 'OpenCL call'} failed with error {code}")
        self.code = code
        self.routine = routine

    @property
    def not_found(self) -> bool:
        return self.code == CL_DEVICE_NOT_FOUND


class BuildError(DriverError):
    """Program build failed; `log` holds the compiler output."""

    def __init__(self, code: int, routine: str, log: str) -> None:
        super().__init__(code, routine)
        self.log = log


class InfoDriver(Protocol):
    """Property-query surface of the OpenCL runtime.

    The info calls follow the two-call convention: with `buffer=None` they
    return the byte size the value needs; with a buffer at least that large
    they fill it and return the number of bytes written.
    """

    def platform_ids(self) -> list[Any]:
        ...

    def device_ids(self, platform: Any) -> list[Any]:
        ...

    def platform_info(
        self, platform: Any, param: int, buffer: bytearray | None
    ) -> int:
        ...

    def device_info(self, device: Any, param: int, buffer: bytearray | None) -> int:
        ...

    def loader_info(self, loader: Any, param: int, buffer: bytearray | None) -> int:
        """ICD loader properties; `loader` is ignored, the loader is process-wide."""
        ...

    def offline_device_ids(self, platform: Any) -> list[Any]:
        ...

    def preferred_work_group_size_multiple(
        self, device: Any, source: str, kernel_name: str
    ) -> int:
        ...
