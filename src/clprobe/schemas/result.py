from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class QueryFailure:
    function: str
    line: int
    description: str
    symbol: str
    code: int

    def __str__(self) -> str:
        return f"<{self.function}:{self.line}: {self.description} : error {self.code}>"


@dataclass(frozen=True)
class QueryResult:
    """Outcome of one property fetch: a typed value with its display text, or a failure."""

    text: str = ""
    failure: QueryFailure | None = None
    _value: Any = None

    @classmethod
    def success(cls, value: Any, text: str | None = None) -> "QueryResult":
        return cls(text=str(value) if text is None else text, _value=value)

    @classmethod
    def failed(cls, failure: QueryFailure) -> "QueryResult":
        return cls(text=str(failure), failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def value(self) -> Any:
        if self.failure is not None:
            raise ValueError(f"No value for failed query: {self.failure}")
        return self._value
