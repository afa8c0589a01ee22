from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ReportLine:
    label: str
    symbol: str
    text: str
    indent: int = 1
    failed: bool = False


@dataclass
class DeviceSection:
    lines: list[ReportLine] = field(default_factory=list)

    @property
    def name(self) -> str:
        for line in self.lines:
            if line.symbol == "CL_DEVICE_NAME" and not line.failed:
                return line.text
        return ""


@dataclass
class PlatformSection:
    name: str
    lines: list[ReportLine] = field(default_factory=list)
    device_count: int = 0
    devices: list[DeviceSection] = field(default_factory=list)
    # "Number of offline devices" row; None when offline devices were not requested.
    offline: ReportLine | None = None
    offline_devices: list[DeviceSection] = field(default_factory=list)


@dataclass
class ProbeReport:
    platform_count: int = 0
    platforms: list[PlatformSection] = field(default_factory=list)
    loader: list[ReportLine] = field(default_factory=list)
