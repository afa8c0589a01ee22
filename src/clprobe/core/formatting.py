from __future__ import annotations

from collections.abc import Iterable

MEM_UNITS: tuple[str, ...] = ("KiB", "MiB", "GiB", "TiB")


def format_mem_size(size: int, *, raw: bool = False) -> str:
    """Render a byte count as "<bytes> (<scaled><unit>)", e.g. "4096 (4KiB)"."""
    if raw or size < 1024:
        return str(size)
    scaled = float(size)
    unit = MEM_UNITS[0]
    for unit in MEM_UNITS:
        scaled /= 1024
        if scaled < 1024:
            break
    return f"{size} ({scaled:.4g}{unit})"


def decode_bitmask(
    mask: int,
    flags: Iterable[tuple[int, str, str]],
    separator: str,
    *,
    raw: bool = False,
) -> str:
    """Join the names of the set bits in declaration order; a zero mask gives ""."""
    names: list[str] = []
    known = 0
    for bit, label, symbol in flags:
        known |= bit
        if mask & bit:
            names.append(symbol if raw else label)
    extra = mask & ~known
    if extra:
        names.append(f"0x{extra:x}")
    return separator.join(names)


def format_bool(value: int, *, raw: bool = False) -> str:
    if raw:
        return "CL_TRUE" if value else "CL_FALSE"
    return "Yes" if value else "No"


def format_enum(value: int, table: dict[int, tuple[str, str]], *, raw: bool = False) -> str:
    entry = table.get(value)
    if entry is None:
        return f"<unknown ({value:#x})>"
    return entry[1] if raw else entry[0]
