from __future__ import annotations


class ClprobeError(Exception):
    """Fatal condition that aborts the whole report."""

    exit_code = 1


class EnumerationError(ClprobeError):
    """Platform or device handles could not be listed at all."""

    def __init__(self, what: str, code: int) -> None:
        super().__init__(f"{what} : error {code}")
        self.what = what
        self.code = code


class OutOfMemoryError(ClprobeError):
    def __init__(self, what: str) -> None:
        super().__init__(f"{what} : Out of memory")
        self.what = what


class LibraryNotFoundError(ClprobeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"cannot load OpenCL library '{name}'")
        self.name = name
