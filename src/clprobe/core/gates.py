from __future__ import annotations

import re
from dataclasses import dataclass, field

from clprobe.core.extensions import (
    DEVICE_MARKERS,
    CapabilityMarker,
    ExtensionRegistry,
    scan,
)
from clprobe.core.params import CL_DEVICE_TYPE_GPU

# "OpenCL " precedes the numeric part of platform and device version strings.
VERSION_PREFIX_LENGTH = 7
DEFAULT_VERSION_ORDINAL = 10

_VERSION_RE = re.compile(r"(\d+)(?:\.(\d+))?")


def parse_version_ordinal(text: str, prefix_length: int = VERSION_PREFIX_LENGTH) -> int:
    """Turn "OpenCL 1.2 ..." into 12; unparseable text counts as 1.0."""
    match = _VERSION_RE.match(text[prefix_length:])
    if match is None:
        return DEFAULT_VERSION_ORDINAL
    major = int(match.group(1))
    minor = int(match.group(2)) if match.group(2) else 0
    return major * 10 + minor


@dataclass
class CapabilityGates:
    """Predicates derived from earlier results of one platform or device traversal."""

    version: int = 0
    device_type: int = 0
    extensions: ExtensionRegistry = field(default_factory=ExtensionRegistry)

    def feed_version(self, text: str) -> None:
        self.version = parse_version_ordinal(text)

    def feed_device_type(self, mask: int) -> None:
        self.device_type = mask

    def feed_extensions(
        self, text: str, markers: tuple[CapabilityMarker, ...] = DEVICE_MARKERS
    ) -> None:
        self.extensions = scan(text, markers)

    def has(self, name: str) -> bool:
        return self.extensions.has(name)

    def matched(self, name: str) -> str | None:
        return self.extensions.matched(name)

    @property
    def is_11(self) -> bool:
        return self.version >= 11

    @property
    def is_12(self) -> bool:
        return self.version >= 12

    @property
    def is_20(self) -> bool:
        return self.version >= 20

    @property
    def is_21(self) -> bool:
        return self.version >= 21

    @property
    def is_gpu(self) -> bool:
        return bool(self.device_type & CL_DEVICE_TYPE_GPU)

    @property
    def has_amd(self) -> bool:
        return self.has("amd")

    @property
    def has_nv(self) -> bool:
        return self.has("nv")

    @property
    def has_intel(self) -> bool:
        return self.has("intel")

    @property
    def is_amd_gpu(self) -> bool:
        return self.is_gpu and self.has_amd

    @property
    def is_nv_gpu(self) -> bool:
        return self.is_gpu and self.has_nv

    @property
    def is_intel_gpu(self) -> bool:
        return self.is_gpu and self.has_intel

    @property
    def has_half(self) -> bool:
        return self.has("half")

    @property
    def has_double(self) -> bool:
        return self.has("double")

    @property
    def has_fission(self) -> bool:
        return self.has("fission")

    @property
    def has_svm(self) -> bool:
        return self.is_20 or self.has("svm")

    @property
    def has_atomic_counters(self) -> bool:
        return self.has("atomic_counters")

    @property
    def has_image2d_buffer(self) -> bool:
        return self.is_12 or self.has("image2d_buffer")

    @property
    def has_spir(self) -> bool:
        return self.has("spir")

    @property
    def has_il(self) -> bool:
        return self.is_21 or self.has("il_program")

    @property
    def has_pci_bus_info(self) -> bool:
        return self.has("pci_bus_info")

    @property
    def has_qcom_host_ptr(self) -> bool:
        return self.has("qcom_ext_host_ptr")

    @property
    def has_altera_temperature(self) -> bool:
        return self.has("altera_temperature")

    @property
    def has_icd(self) -> bool:
        return self.has("icd")

    @property
    def has_amd_offline(self) -> bool:
        return self.has("amd_offline")
