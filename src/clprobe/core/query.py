from __future__ import annotations

import inspect
import logging
import sys
from collections.abc import Callable
from typing import Any

import numpy as np

from clprobe.core.buffer import ScratchBuffer
from clprobe.core.params import CL_INVALID_VALUE
from clprobe.infra.config import ReportConfig, build_report_config
from clprobe.infra.driver import DriverError, InfoDriver, InfoKind
from clprobe.schemas.result import QueryFailure, QueryResult

logger = logging.getLogger(__name__)

CL_UINT = np.dtype(np.uint32)
CL_INT = np.dtype(np.int32)
CL_ULONG = np.dtype(np.uint64)
CL_BOOL = CL_UINT
CL_BITFIELD = CL_ULONG
SIZE_T = np.dtype(np.uintp)
INTPTR_T = np.dtype(np.intp)

_ASCII_WHITESPACE = " \t\n\r\x0b\x0c"


def _caller_location() -> tuple[str, int]:
    # Report the first public caller outside this module, i.e. the render function.
    frame = inspect.currentframe()
    while frame is not None and (
        frame.f_globals.get("__name__") == __name__
        or frame.f_code.co_name.startswith("_")
    ):
        frame = frame.f_back
    if frame is None:
        return "?", 0
    return frame.f_code.co_name, frame.f_lineno


def _stderr_diagnostic(text: str) -> None:
    sys.stderr.write(text if text.endswith("\n") else text + "\n")
    sys.stderr.flush()


def make_failure(description: str, symbol: str, code: int) -> QueryFailure:
    function, line = _caller_location()
    return QueryFailure(
        function=function,
        line=line,
        description=description,
        symbol=symbol,
        code=code,
    )


class QueryContext:
    """Per-run query state: the driver, the output configuration and the scratch buffer."""

    def __init__(
        self,
        driver: InfoDriver,
        config: ReportConfig | None = None,
        buffer: ScratchBuffer | None = None,
        diagnostic: Callable[[str], None] | None = None,
    ) -> None:
        self.driver = driver
        self.config = config or build_report_config(raw=False)
        self.buffer = buffer or ScratchBuffer()
        self.diagnostic = diagnostic or _stderr_diagnostic

    @property
    def raw(self) -> bool:
        return self.config.raw

    @property
    def separator(self) -> str:
        return self.config.separator

    def attempt(self, gate_open: bool) -> bool:
        """Whether a gated property should be queried under the current property mode."""
        return gate_open or self.config.prop_mode != "check"

    def keep(self, gate_open: bool, result: QueryResult) -> bool:
        """Whether the outcome of a query made with a closed gate should be reported."""
        return gate_open or result.ok or self.config.prop_mode == "show"

    def fetch(
        self, kind: InfoKind, handle: Any, param: int, symbol: str
    ) -> tuple[QueryFailure | None, bytes]:
        """Size probe, grow the scratch buffer, fill; returns (failure, payload)."""
        call = {
            "platform": self.driver.platform_info,
            "device": self.driver.device_info,
            "loader": self.driver.loader_info,
        }[kind]
        try:
            size = call(handle, param, None)
        except DriverError as exc:
            logger.debug("size probe for %s failed: %s", symbol, exc)
            return make_failure(f"get {symbol} size", symbol, exc.code), b""
        data = self.buffer.ensure_capacity(size, symbol)
        try:
            written = call(handle, param, data)
        except DriverError as exc:
            logger.debug("fetch of %s failed: %s", symbol, exc)
            return make_failure(f"get {symbol}", symbol, exc.code), b""
        return None, bytes(data[: min(written, size)])

    def scalar(
        self, kind: InfoKind, handle: Any, param: int, symbol: str, dtype: np.dtype
    ) -> QueryResult:
        failure, payload = self.fetch(kind, handle, param, symbol)
        if failure is not None:
            return QueryResult.failed(failure)
        if len(payload) != dtype.itemsize:
            return QueryResult.failed(
                make_failure(
                    f"get {symbol} (size mismatch: requested {len(payload)}, "
                    f"we offer {dtype.itemsize})",
                    symbol,
                    CL_INVALID_VALUE,
                )
            )
        value = int(np.frombuffer(payload, dtype=dtype, count=1)[0])
        return QueryResult.success(value)

    def string(self, kind: InfoKind, handle: Any, param: int, symbol: str) -> QueryResult:
        failure, payload = self.fetch(kind, handle, param, symbol)
        if failure is not None:
            return QueryResult.failed(failure)
        text = payload.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        text = text.lstrip(_ASCII_WHITESPACE)
        return QueryResult.success(text)

    def array(
        self, kind: InfoKind, handle: Any, param: int, symbol: str, dtype: np.dtype
    ) -> QueryResult:
        failure, payload = self.fetch(kind, handle, param, symbol)
        if failure is not None:
            return QueryResult.failed(failure)
        count = len(payload) // dtype.itemsize
        values = np.frombuffer(payload, dtype=dtype, count=count)
        return QueryResult.success(tuple(int(item) for item in values))
