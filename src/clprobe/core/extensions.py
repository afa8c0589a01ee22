from __future__ import annotations

from dataclasses import dataclass, field

MATCH_DISPLAY_WIDTH = 31


@dataclass(frozen=True)
class CapabilityMarker:
    """A capability signalled by one of several extension names, checked in priority order."""

    name: str
    markers: tuple[str, ...]
    width: int = MATCH_DISPLAY_WIDTH


@dataclass
class ExtensionRegistry:
    matches: dict[str, str] = field(default_factory=dict)

    def has(self, name: str) -> bool:
        return name in self.matches

    def matched(self, name: str) -> str | None:
        return self.matches.get(name)


DEVICE_MARKERS: tuple[CapabilityMarker, ...] = (
    CapabilityMarker("half", ("cl_khr_fp16",)),
    CapabilityMarker("double", ("cl_khr_fp64", "cl_amd_fp64", "cl_APPLE_fp64_basic_ops")),
    CapabilityMarker("fission", ("cl_ext_device_fission",)),
    CapabilityMarker(
        "atomic_counters", ("cl_ext_atomic_counters_64", "cl_ext_atomic_counters_32")
    ),
    CapabilityMarker("amd", ("cl_amd_device_attribute_query",)),
    CapabilityMarker("nv", ("cl_nv_device_attribute_query",)),
    CapabilityMarker("intel", ("cl_intel_device_attribute_query",)),
    CapabilityMarker("svm", ("cl_arm_shared_virtual_memory",)),
    CapabilityMarker("image2d_buffer", ("cl_khr_image2d_from_buffer",)),
    CapabilityMarker("spir", ("cl_khr_spir",)),
    CapabilityMarker("il_program", ("cl_khr_il_program",)),
    CapabilityMarker("pci_bus_info", ("cl_khr_pci_bus_info",)),
    CapabilityMarker("qcom_ext_host_ptr", ("cl_qcom_ext_host_ptr",)),
    CapabilityMarker("altera_temperature", ("cl_altera_device_temperature",)),
    CapabilityMarker("intel_partition_by_names", ("cl_intel_device_partition_by_names",)),
)

PLATFORM_MARKERS: tuple[CapabilityMarker, ...] = (
    CapabilityMarker("icd", ("cl_khr_icd",)),
    CapabilityMarker("amd_offline", ("cl_amd_offline_devices",)),
)


def scan(
    extensions: str, markers: tuple[CapabilityMarker, ...] = DEVICE_MARKERS
) -> ExtensionRegistry:
    registry = ExtensionRegistry()
    for capability in markers:
        for marker in capability.markers:
            if marker in extensions:
                registry.matches[capability.name] = marker[: capability.width]
                break
    return registry
