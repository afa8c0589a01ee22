from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

HUMAN_MODE = "human"
RAW_MODE = "raw"
SUPPORTED_OUTPUT_MODES = {HUMAN_MODE, RAW_MODE}
SUPPORTED_OUTPUT_FORMATS = {"text", "json"}
# check: skip rows whose gate is false; try: query anyway, keep only successes;
# show: query anyway, keep failures too.
SUPPORTED_PROP_MODES = ("check", "try", "show")
RAW_INVOCATION_MARKER = "raw"
DEFAULT_SEPARATORS = {HUMAN_MODE: ", ", RAW_MODE: " | "}
PROP_MODE_ENV = "CLPROBE_PROP_MODE"


@dataclass(frozen=True)
class ReportConfig:
    mode: str
    output_format: str
    prop_mode: str
    separator: str
    list_only: bool
    opencl_library: Path | None
    offline: bool = False

    @property
    def raw(self) -> bool:
        return self.mode == RAW_MODE


def resolve_output_mode(raw: bool | None, invocation_name: str | None = None) -> str:
    """An explicit flag wins; otherwise a program name containing "raw" selects raw labels."""
    if raw is not None:
        return RAW_MODE if raw else HUMAN_MODE
    name = Path(invocation_name if invocation_name is not None else sys.argv[0]).name
    return RAW_MODE if RAW_INVOCATION_MARKER in name else HUMAN_MODE


def normalize_output_format(value: str) -> str:
    fmt = value.strip().lower()
    if fmt not in SUPPORTED_OUTPUT_FORMATS:
        raise ValueError(
            f"Unsupported output format '{value}'. Allowed: {sorted(SUPPORTED_OUTPUT_FORMATS)}"
        )
    return fmt


def normalize_prop_mode(value: str | None) -> str:
    from_env = not value
    mode = (value or os.getenv(PROP_MODE_ENV) or "check").strip().lower()
    if mode not in SUPPORTED_PROP_MODES:
        origin = f" (from {PROP_MODE_ENV})" if from_env else ""
        raise ValueError(
            f"Unsupported property mode '{mode}'{origin}. "
            f"Allowed: {', '.join(SUPPORTED_PROP_MODES)}"
        )
    return mode


def resolve_opencl_library(custom_path: Path | None = None) -> Path | None:
    if custom_path is not None:
        return custom_path.expanduser().resolve()
    env_path = os.getenv("CLPROBE_OPENCL_LIBRARY")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return None


def build_report_config(
    *,
    raw: bool | None = None,
    invocation_name: str | None = None,
    output_format: str = "text",
    prop_mode: str | None = None,
    separator: str | None = None,
    list_only: bool = False,
    opencl_library: Path | None = None,
    offline: bool = False,
) -> ReportConfig:
    mode = resolve_output_mode(raw, invocation_name)
    return ReportConfig(
        mode=mode,
        output_format=normalize_output_format(output_format),
        prop_mode=normalize_prop_mode(prop_mode),
        separator=DEFAULT_SEPARATORS[mode] if separator is None else separator,
        list_only=list_only,
        opencl_library=resolve_opencl_library(opencl_library),
        offline=offline,
    )
