from __future__ import annotations

import json
from typing import Any

from clprobe.infra.config import ReportConfig
from clprobe.schemas.report import DeviceSection, PlatformSection, ProbeReport, ReportLine

LABEL_COLUMN = 48
INDENT = "  "
LOADER_TITLE = "ICD loader properties"


def format_line(label: str, text: str, indent: int = 1) -> str:
    width = LABEL_COLUMN - len(INDENT) * indent
    return f"{INDENT * indent}{label:<{width}}  {text}".rstrip()


def _line(line: ReportLine) -> str:
    return format_line(line.label, line.text, line.indent)


def _count_line(config: ReportConfig, human: str, symbol: str, count: int) -> str:
    return format_line(symbol if config.raw else human, str(count), indent=0)


def render_text(report: ProbeReport, config: ReportConfig) -> str:
    """Platform rows first, then each platform's devices, as fixed-width label/value lines."""
    if config.list_only:
        return render_listing(report)
    out = [_count_line(config, "Number of platforms", "#PLATFORMS", report.platform_count)]
    for platform in report.platforms:
        out.extend(_line(line) for line in platform.lines)
        out.append("")
    for platform in report.platforms:
        out.append(
            format_line("CL_PLATFORM_NAME" if config.raw else "Platform Name", platform.name)
        )
        out.append(_count_line(config, "Number of devices", "#DEVICES", platform.device_count))
        for device in platform.devices:
            out.extend(_line(line) for line in device.lines)
            out.append("")
        if platform.offline is not None:
            out.append(_line(platform.offline))
            for device in platform.offline_devices:
                out.extend(_line(line) for line in device.lines)
                out.append("")
    if report.loader:
        if out[-1]:
            out.append("")
        out.append(LOADER_TITLE)
        out.extend(_line(line) for line in report.loader)
    return "\n".join(out).rstrip("\n") + "\n"


def render_listing(report: ProbeReport) -> str:
    out: list[str] = []
    for index, platform in enumerate(report.platforms):
        out.append(f"Platform #{index}: {platform.name}")
        last = len(platform.devices) - 1
        for position, device in enumerate(platform.devices):
            branch = "`--" if position == last else "+--"
            out.append(f" {branch} Device #{position}: {device.name or device.lines[0].text}")
    return "\n".join(out) + ("\n" if out else "")


def _properties(lines: list[ReportLine]) -> dict[str, Any]:
    """Symbol-keyed values; indented detail lines are keyed under their parent's symbol."""
    props: dict[str, Any] = {}
    parent = ""
    for line in lines:
        if line.indent <= 1:
            parent = line.symbol
            key = line.symbol
        else:
            key = f"{parent}.{line.symbol}" if parent else line.symbol
        props[key] = {"error": line.text} if line.failed else line.text
    return props


def _device_payload(device: DeviceSection) -> dict[str, Any]:
    return {"name": device.name, "properties": _properties(device.lines)}


def _platform_payload(platform: PlatformSection) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": platform.name,
        "properties": _properties(platform.lines),
        "number_of_devices": platform.device_count,
        "devices": [_device_payload(device) for device in platform.devices],
    }
    if platform.offline is not None:
        count = platform.offline
        payload["number_of_offline_devices"] = (
            {"error": count.text} if count.failed else int(count.text)
        )
        payload["offline_devices"] = [
            _device_payload(device) for device in platform.offline_devices
        ]
    return payload


def report_payload(report: ProbeReport) -> dict[str, Any]:
    return {
        "number_of_platforms": report.platform_count,
        "platforms": [_platform_payload(platform) for platform in report.platforms],
        "icd_loader": _properties(report.loader),
    }


def render_json(report: ProbeReport) -> str:
    return json.dumps(report_payload(report), ensure_ascii=False, indent=2) + "\n"
