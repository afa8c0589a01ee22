from __future__ import annotations

from clprobe.core import composite
from clprobe.core import params as cl
from clprobe.core.composite import Composite
from clprobe.core.extensions import PLATFORM_MARKERS
from clprobe.core.query import CL_UINT, SIZE_T
from clprobe.core.traits import (
    TraitDescriptor,
    enum,
    image_dims,
    mem_size,
    render_bool,
    render_device_type,
    render_free_memory_amd,
    render_hex,
    render_int,
    render_pci_bus_info,
    render_size,
    render_size_array,
    render_string,
    render_topology_amd,
    render_uint,
    render_ulong,
    version_pair,
)

Step = TraitDescriptor | Composite


def _feed_version(gates, value) -> None:
    gates.feed_version(value)


def _feed_device_type(gates, value) -> None:
    gates.feed_device_type(value)


def _feed_device_extensions(gates, value) -> None:
    gates.feed_extensions(value)


def _feed_platform_extensions(gates, value) -> None:
    gates.feed_extensions(value, PLATFORM_MARKERS)


PLATFORM_TRAITS: tuple[TraitDescriptor, ...] = (
    TraitDescriptor(
        cl.CL_PLATFORM_NAME, "CL_PLATFORM_NAME", "Platform Name", render_string, kind="platform"
    ),
    TraitDescriptor(
        cl.CL_PLATFORM_VENDOR,
        "CL_PLATFORM_VENDOR",
        "Platform Vendor",
        render_string,
        kind="platform",
    ),
    TraitDescriptor(
        cl.CL_PLATFORM_VERSION,
        "CL_PLATFORM_VERSION",
        "Platform Version",
        render_string,
        feeds=_feed_version,
        kind="platform",
    ),
    TraitDescriptor(
        cl.CL_PLATFORM_PROFILE,
        "CL_PLATFORM_PROFILE",
        "Platform Profile",
        render_string,
        kind="platform",
    ),
    TraitDescriptor(
        cl.CL_PLATFORM_EXTENSIONS,
        "CL_PLATFORM_EXTENSIONS",
        "Platform Extensions",
        render_string,
        feeds=_feed_platform_extensions,
        kind="platform",
    ),
    TraitDescriptor(
        cl.CL_PLATFORM_ICD_SUFFIX_KHR,
        "CL_PLATFORM_ICD_SUFFIX_KHR",
        "Platform Extensions function suffix",
        render_string,
        gate=lambda gates: gates.has_icd,
        kind="platform",
    ),
    TraitDescriptor(
        cl.CL_PLATFORM_HOST_TIMER_RESOLUTION,
        "CL_PLATFORM_HOST_TIMER_RESOLUTION",
        "Platform Host timer resolution",
        render_ulong,
        unit="ns",
        gate=lambda gates: gates.is_21,
        kind="platform",
    ),
)


DEVICE_TRAITS: tuple[TraitDescriptor, ...] = (
    TraitDescriptor(cl.CL_DEVICE_NAME, "CL_DEVICE_NAME", "Device Name", render_string),
    TraitDescriptor(cl.CL_DEVICE_VENDOR, "CL_DEVICE_VENDOR", "Device Vendor", render_string),
    TraitDescriptor(cl.CL_DEVICE_VENDOR_ID, "CL_DEVICE_VENDOR_ID", "Device Vendor ID", render_hex),
    TraitDescriptor(
        cl.CL_DEVICE_VERSION,
        "CL_DEVICE_VERSION",
        "Device Version",
        render_string,
        feeds=_feed_version,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_EXTENSIONS,
        "CL_DEVICE_EXTENSIONS",
        "Device Extensions",
        render_string,
        feeds=_feed_device_extensions,
        deferred=True,
    ),
    TraitDescriptor(cl.CL_DRIVER_VERSION, "CL_DRIVER_VERSION", "Driver Version", render_string),
    TraitDescriptor(
        cl.CL_DEVICE_OPENCL_C_VERSION,
        "CL_DEVICE_OPENCL_C_VERSION",
        "Device OpenCL C Version",
        render_string,
        gate=lambda gates: gates.is_11,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_BOARD_NAME_AMD,
        "CL_DEVICE_BOARD_NAME_AMD",
        "Device Board Name (AMD)",
        render_string,
        gate=lambda gates: gates.has_amd,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_TOPOLOGY_AMD,
        "CL_DEVICE_TOPOLOGY_AMD",
        "Device Topology (AMD)",
        render_topology_amd,
        gate=lambda gates: gates.has_amd,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_PCI_BUS_INFO_KHR,
        "CL_DEVICE_PCI_BUS_INFO_KHR",
        "Device PCI bus info (KHR)",
        render_pci_bus_info,
        gate=lambda gates: gates.has_pci_bus_info,
    ),
    TraitDescriptor(cl.CL_DEVICE_PROFILE, "CL_DEVICE_PROFILE", "Device Profile", render_string),
    TraitDescriptor(cl.CL_DEVICE_AVAILABLE, "CL_DEVICE_AVAILABLE", "Device Available", render_bool),
    TraitDescriptor(
        cl.CL_DEVICE_COMPILER_AVAILABLE,
        "CL_DEVICE_COMPILER_AVAILABLE",
        "Compiler Available",
        render_bool,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_LINKER_AVAILABLE,
        "CL_DEVICE_LINKER_AVAILABLE",
        "Linker Available",
        render_bool,
        gate=lambda gates: gates.is_12,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_TYPE,
        "CL_DEVICE_TYPE",
        "Device Type",
        render_device_type,
        feeds=_feed_device_type,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_COMPUTE_CAPABILITY_MAJOR_NV,
        "CL_DEVICE_COMPUTE_CAPABILITY_NV",
        "NVIDIA Compute Capability",
        version_pair(
            cl.CL_DEVICE_COMPUTE_CAPABILITY_MINOR_NV, "CL_DEVICE_COMPUTE_CAPABILITY_MINOR_NV"
        ),
        gate=lambda gates: gates.has_nv,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_COMPUTE_UNITS,
        "CL_DEVICE_MAX_COMPUTE_UNITS",
        "Max compute units",
        render_uint,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_SIMD_PER_COMPUTE_UNIT_AMD,
        "CL_DEVICE_SIMD_PER_COMPUTE_UNIT_AMD",
        "SIMD per compute unit (AMD)",
        render_uint,
        gate=lambda gates: gates.is_amd_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_SIMD_WIDTH_AMD,
        "CL_DEVICE_SIMD_WIDTH_AMD",
        "SIMD width (AMD)",
        render_uint,
        gate=lambda gates: gates.is_amd_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_SIMD_INSTRUCTION_WIDTH_AMD,
        "CL_DEVICE_SIMD_INSTRUCTION_WIDTH_AMD",
        "SIMD instruction width (AMD)",
        render_uint,
        gate=lambda gates: gates.is_amd_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_WAVEFRONT_WIDTH_AMD,
        "CL_DEVICE_WAVEFRONT_WIDTH_AMD",
        "Wavefront width (AMD)",
        render_uint,
        gate=lambda gates: gates.is_amd_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_GFXIP_MAJOR_AMD,
        "CL_DEVICE_GFXIP_AMD",
        "Graphics IP (AMD)",
        version_pair(cl.CL_DEVICE_GFXIP_MINOR_AMD, "CL_DEVICE_GFXIP_MINOR_AMD"),
        gate=lambda gates: gates.is_amd_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_IP_VERSION_INTEL,
        "CL_DEVICE_IP_VERSION_INTEL",
        "Device IP (Intel)",
        render_hex,
        gate=lambda gates: gates.is_intel_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_ID_INTEL,
        "CL_DEVICE_ID_INTEL",
        "Device ID (Intel)",
        render_hex,
        gate=lambda gates: gates.is_intel_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_NUM_SLICES_INTEL,
        "CL_DEVICE_NUM_SLICES_INTEL",
        "Slices (Intel)",
        render_uint,
        gate=lambda gates: gates.is_intel_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_NUM_SUB_SLICES_PER_SLICE_INTEL,
        "CL_DEVICE_NUM_SUB_SLICES_PER_SLICE_INTEL",
        "Sub-slices per slice (Intel)",
        render_uint,
        gate=lambda gates: gates.is_intel_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_NUM_EUS_PER_SUB_SLICE_INTEL,
        "CL_DEVICE_NUM_EUS_PER_SUB_SLICE_INTEL",
        "EU per sub-slice (Intel)",
        render_uint,
        gate=lambda gates: gates.is_intel_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_NUM_THREADS_PER_EU_INTEL,
        "CL_DEVICE_NUM_THREADS_PER_EU_INTEL",
        "Threads per EU (Intel)",
        render_uint,
        gate=lambda gates: gates.is_intel_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_CLOCK_FREQUENCY,
        "CL_DEVICE_MAX_CLOCK_FREQUENCY",
        "Max clock frequency",
        render_uint,
        unit="MHz",
    ),
    TraitDescriptor(
        cl.CL_DEVICE_REGISTERS_PER_BLOCK_NV,
        "CL_DEVICE_REGISTERS_PER_BLOCK_NV",
        "Registers per block (NV)",
        render_uint,
        gate=lambda gates: gates.is_nv_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_WARP_SIZE_NV,
        "CL_DEVICE_WARP_SIZE_NV",
        "Warp size (NV)",
        render_uint,
        gate=lambda gates: gates.is_nv_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_WORK_ITEM_DIMENSIONS,
        "CL_DEVICE_MAX_WORK_ITEM_DIMENSIONS",
        "Max work item dimensions",
        render_uint,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_WORK_ITEM_SIZES,
        "CL_DEVICE_MAX_WORK_ITEM_SIZES",
        "Max work item sizes",
        render_size_array,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_WORK_GROUP_SIZE,
        "CL_DEVICE_MAX_WORK_GROUP_SIZE",
        "Max work group size",
        render_size,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_GPU_OVERLAP_NV,
        "CL_DEVICE_GPU_OVERLAP_NV",
        "Concurrent copy and kernel execution (NV)",
        render_bool,
        gate=lambda gates: gates.is_nv_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_KERNEL_EXEC_TIMEOUT_NV,
        "CL_DEVICE_KERNEL_EXEC_TIMEOUT_NV",
        "Kernel execution timeout (NV)",
        render_bool,
        gate=lambda gates: gates.is_nv_gpu,
    ),
)


MEMORY_STEPS: tuple[Step, ...] = (
    TraitDescriptor(
        cl.CL_DEVICE_ADDRESS_BITS, "CL_DEVICE_ADDRESS_BITS", "Address bits", render_uint
    ),
    TraitDescriptor(
        cl.CL_DEVICE_ENDIAN_LITTLE, "CL_DEVICE_ENDIAN_LITTLE", "Little-Endian", render_bool
    ),
    TraitDescriptor(
        cl.CL_DEVICE_GLOBAL_MEM_SIZE,
        "CL_DEVICE_GLOBAL_MEM_SIZE",
        "Global memory size",
        mem_size(),
    ),
    TraitDescriptor(
        cl.CL_DEVICE_ERROR_CORRECTION_SUPPORT,
        "CL_DEVICE_ERROR_CORRECTION_SUPPORT",
        "Error Correction support",
        render_bool,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_MEM_ALLOC_SIZE,
        "CL_DEVICE_MAX_MEM_ALLOC_SIZE",
        "Max memory allocation",
        mem_size(),
    ),
    TraitDescriptor(
        cl.CL_DEVICE_HOST_UNIFIED_MEMORY,
        "CL_DEVICE_HOST_UNIFIED_MEMORY",
        "Unified memory for Host and Device",
        render_bool,
        gate=lambda gates: gates.is_11,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_INTEGRATED_MEMORY_NV,
        "CL_DEVICE_INTEGRATED_MEMORY_NV",
        "Integrated memory (NV)",
        render_bool,
        gate=lambda gates: gates.is_nv_gpu,
    ),
    composite.svm_summary,
    TraitDescriptor(
        cl.CL_DEVICE_GLOBAL_FREE_MEMORY_AMD,
        "CL_DEVICE_GLOBAL_FREE_MEMORY_AMD",
        "Free global memory (AMD)",
        render_free_memory_amd,
        gate=lambda gates: gates.is_amd_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_GLOBAL_MEM_CHANNELS_AMD,
        "CL_DEVICE_GLOBAL_MEM_CHANNELS_AMD",
        "Global memory channels (AMD)",
        render_uint,
        gate=lambda gates: gates.is_amd_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_GLOBAL_MEM_CHANNEL_BANKS_AMD,
        "CL_DEVICE_GLOBAL_MEM_CHANNEL_BANKS_AMD",
        "Global memory banks per channel (AMD)",
        render_uint,
        gate=lambda gates: gates.is_amd_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_GLOBAL_MEM_CHANNEL_BANK_WIDTH_AMD,
        "CL_DEVICE_GLOBAL_MEM_CHANNEL_BANK_WIDTH_AMD",
        "Global memory bank width (AMD)",
        render_uint,
        unit=" bytes",
        gate=lambda gates: gates.is_amd_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MIN_DATA_TYPE_ALIGN_SIZE,
        "CL_DEVICE_MIN_DATA_TYPE_ALIGN_SIZE",
        "Minimum alignment for any data type",
        render_uint,
        unit=" bytes",
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MEM_BASE_ADDR_ALIGN,
        "CL_DEVICE_MEM_BASE_ADDR_ALIGN",
        "Alignment of base address",
        render_uint,
        unit=" bits",
    ),
    TraitDescriptor(
        cl.CL_DEVICE_PAGE_SIZE_QCOM,
        "CL_DEVICE_PAGE_SIZE_QCOM",
        "Page size (QCOM)",
        mem_size(SIZE_T),
        gate=lambda gates: gates.has_qcom_host_ptr,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_EXT_MEM_PADDING_IN_BYTES_QCOM,
        "CL_DEVICE_EXT_MEM_PADDING_IN_BYTES_QCOM",
        "External memory padding (QCOM)",
        render_size,
        unit=" bytes",
        gate=lambda gates: gates.has_qcom_host_ptr,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_GLOBAL_VARIABLE_SIZE,
        "CL_DEVICE_MAX_GLOBAL_VARIABLE_SIZE",
        "Max size for global variable",
        mem_size(SIZE_T),
        gate=lambda gates: gates.is_20,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_GLOBAL_VARIABLE_PREFERRED_TOTAL_SIZE,
        "CL_DEVICE_GLOBAL_VARIABLE_PREFERRED_TOTAL_SIZE",
        "Preferred total size of global vars",
        mem_size(SIZE_T),
        gate=lambda gates: gates.is_20,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_GLOBAL_MEM_CACHE_TYPE,
        "CL_DEVICE_GLOBAL_MEM_CACHE_TYPE",
        "Global Memory cache type",
        enum(cl.CACHE_TYPES),
    ),
    TraitDescriptor(
        cl.CL_DEVICE_GLOBAL_MEM_CACHE_SIZE,
        "CL_DEVICE_GLOBAL_MEM_CACHE_SIZE",
        "Global Memory cache size",
        mem_size(),
    ),
    TraitDescriptor(
        cl.CL_DEVICE_GLOBAL_MEM_CACHELINE_SIZE,
        "CL_DEVICE_GLOBAL_MEM_CACHELINE_SIZE",
        "Global Memory cache line size",
        render_uint,
        unit=" bytes",
    ),
    TraitDescriptor(
        cl.CL_DEVICE_IMAGE_SUPPORT, "CL_DEVICE_IMAGE_SUPPORT", "Image support", render_bool
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_SAMPLERS,
        "CL_DEVICE_MAX_SAMPLERS",
        "Max number of samplers per kernel",
        render_uint,
        indent=2,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_IMAGE_MAX_BUFFER_SIZE,
        "CL_DEVICE_IMAGE_MAX_BUFFER_SIZE",
        "Max size for 1D images from buffer",
        render_size,
        unit=" pixels",
        gate=lambda gates: gates.is_12,
        indent=2,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_IMAGE_MAX_ARRAY_SIZE,
        "CL_DEVICE_IMAGE_MAX_ARRAY_SIZE",
        "Max 1D or 2D image array size",
        render_size,
        unit=" images",
        gate=lambda gates: gates.is_12,
        indent=2,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_IMAGE_BASE_ADDRESS_ALIGNMENT,
        "CL_DEVICE_IMAGE_BASE_ADDRESS_ALIGNMENT",
        "Base address alignment for 2D image buffers",
        render_uint,
        unit=" bytes",
        gate=lambda gates: gates.has_image2d_buffer,
        indent=2,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_IMAGE_PITCH_ALIGNMENT,
        "CL_DEVICE_IMAGE_PITCH_ALIGNMENT",
        "Pitch alignment for 2D image buffers",
        render_uint,
        unit=" pixels",
        gate=lambda gates: gates.has_image2d_buffer,
        indent=2,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_IMAGE2D_MAX_WIDTH,
        "CL_DEVICE_IMAGE2D_MAX_SIZE",
        "Max 2D image size",
        image_dims((cl.CL_DEVICE_IMAGE2D_MAX_HEIGHT, "CL_DEVICE_IMAGE2D_MAX_HEIGHT")),
        unit=" pixels",
        indent=2,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_IMAGE3D_MAX_WIDTH,
        "CL_DEVICE_IMAGE3D_MAX_SIZE",
        "Max 3D image size",
        image_dims(
            (cl.CL_DEVICE_IMAGE3D_MAX_HEIGHT, "CL_DEVICE_IMAGE3D_MAX_HEIGHT"),
            (cl.CL_DEVICE_IMAGE3D_MAX_DEPTH, "CL_DEVICE_IMAGE3D_MAX_DEPTH"),
        ),
        unit=" pixels",
        indent=2,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_READ_IMAGE_ARGS,
        "CL_DEVICE_MAX_READ_IMAGE_ARGS",
        "Max number of read image args",
        render_uint,
        indent=2,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_WRITE_IMAGE_ARGS,
        "CL_DEVICE_MAX_WRITE_IMAGE_ARGS",
        "Max number of write image args",
        render_uint,
        indent=2,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_READ_WRITE_IMAGE_ARGS,
        "CL_DEVICE_MAX_READ_WRITE_IMAGE_ARGS",
        "Max number of read/write image args",
        render_uint,
        gate=lambda gates: gates.is_20,
        indent=2,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_PIPE_ARGS,
        "CL_DEVICE_MAX_PIPE_ARGS",
        "Max number of pipe args",
        render_uint,
        gate=lambda gates: gates.is_20,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_PIPE_MAX_ACTIVE_RESERVATIONS,
        "CL_DEVICE_PIPE_MAX_ACTIVE_RESERVATIONS",
        "Max active pipe reservations",
        render_uint,
        gate=lambda gates: gates.is_20,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_PIPE_MAX_PACKET_SIZE,
        "CL_DEVICE_PIPE_MAX_PACKET_SIZE",
        "Max pipe packet size",
        mem_size(CL_UINT),
        gate=lambda gates: gates.is_20,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_LOCAL_MEM_TYPE,
        "CL_DEVICE_LOCAL_MEM_TYPE",
        "Local memory type",
        enum(cl.LOCAL_MEM_TYPES),
    ),
    TraitDescriptor(
        cl.CL_DEVICE_LOCAL_MEM_SIZE,
        "CL_DEVICE_LOCAL_MEM_SIZE",
        "Local memory size",
        mem_size(),
    ),
    TraitDescriptor(
        cl.CL_DEVICE_LOCAL_MEM_SIZE_PER_COMPUTE_UNIT_AMD,
        "CL_DEVICE_LOCAL_MEM_SIZE_PER_COMPUTE_UNIT_AMD",
        "Local memory size per CU (AMD)",
        mem_size(CL_UINT),
        gate=lambda gates: gates.is_amd_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_LOCAL_MEM_BANKS_AMD,
        "CL_DEVICE_LOCAL_MEM_BANKS_AMD",
        "Local memory banks (AMD)",
        render_uint,
        gate=lambda gates: gates.is_amd_gpu,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_CONSTANT_BUFFER_SIZE,
        "CL_DEVICE_MAX_CONSTANT_BUFFER_SIZE",
        "Max constant buffer size",
        mem_size(),
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_CONSTANT_ARGS,
        "CL_DEVICE_MAX_CONSTANT_ARGS",
        "Max number of constant args",
        render_uint,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_PARAMETER_SIZE,
        "CL_DEVICE_MAX_PARAMETER_SIZE",
        "Max size of kernel argument",
        mem_size(SIZE_T),
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_ATOMIC_COUNTERS_EXT,
        "CL_DEVICE_MAX_ATOMIC_COUNTERS_EXT",
        "Max number of atomic counters",
        render_uint,
        gate=lambda gates: gates.has_atomic_counters,
    ),
)


QUEUE_STEPS: tuple[Step, ...] = (
    composite.queue_properties,
    composite.device_queue_properties,
    TraitDescriptor(
        cl.CL_DEVICE_QUEUE_ON_DEVICE_PREFERRED_SIZE,
        "CL_DEVICE_QUEUE_ON_DEVICE_PREFERRED_SIZE",
        "Preferred size",
        mem_size(CL_UINT),
        gate=lambda gates: gates.is_20,
        indent=2,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_QUEUE_ON_DEVICE_MAX_SIZE,
        "CL_DEVICE_QUEUE_ON_DEVICE_MAX_SIZE",
        "Max size",
        mem_size(CL_UINT),
        gate=lambda gates: gates.is_20,
        indent=2,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_ON_DEVICE_QUEUES,
        "CL_DEVICE_MAX_ON_DEVICE_QUEUES",
        "Max queues on device",
        render_uint,
        gate=lambda gates: gates.is_20,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_ON_DEVICE_EVENTS,
        "CL_DEVICE_MAX_ON_DEVICE_EVENTS",
        "Max events on device",
        render_uint,
        gate=lambda gates: gates.is_20,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_PREFERRED_INTEROP_USER_SYNC,
        "CL_DEVICE_PREFERRED_INTEROP_USER_SYNC",
        "Prefer user sync for interop",
        render_bool,
        gate=lambda gates: gates.is_12,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_PROFILING_TIMER_RESOLUTION,
        "CL_DEVICE_PROFILING_TIMER_RESOLUTION",
        "Profiling timer resolution",
        render_size,
        unit="ns",
    ),
    TraitDescriptor(
        cl.CL_DEVICE_PROFILING_TIMER_OFFSET_AMD,
        "CL_DEVICE_PROFILING_TIMER_OFFSET_AMD",
        "Profiling timer offset since Epoch (AMD)",
        render_ulong,
        unit="ns",
        gate=lambda gates: gates.has_amd,
    ),
    composite.execution_capabilities,
)


MISC_STEPS: tuple[Step, ...] = (
    TraitDescriptor(
        cl.CL_DEVICE_PRINTF_BUFFER_SIZE,
        "CL_DEVICE_PRINTF_BUFFER_SIZE",
        "printf() buffer size",
        mem_size(SIZE_T),
        gate=lambda gates: gates.is_12,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_BUILT_IN_KERNELS,
        "CL_DEVICE_BUILT_IN_KERNELS",
        "Built-in kernels",
        render_string,
        gate=lambda gates: gates.is_12,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_IL_VERSION,
        "CL_DEVICE_IL_VERSION",
        "IL version",
        render_string,
        gate=lambda gates: gates.has_il,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_SPIR_VERSIONS,
        "CL_DEVICE_SPIR_VERSIONS",
        "SPIR versions",
        render_string,
        gate=lambda gates: gates.has_spir,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_MAX_NUM_SUB_GROUPS,
        "CL_DEVICE_MAX_NUM_SUB_GROUPS",
        "Max number of sub-groups",
        render_uint,
        gate=lambda gates: gates.is_21,
    ),
    TraitDescriptor(
        cl.CL_DEVICE_CORE_TEMPERATURE_ALTERA,
        "CL_DEVICE_CORE_TEMPERATURE_ALTERA",
        "Core temperature (Altera)",
        render_int,
        unit=" C",
        gate=lambda gates: gates.has_altera_temperature,
    ),
)


LOADER_TRAITS: tuple[TraitDescriptor, ...] = (
    TraitDescriptor(
        cl.CL_ICDL_NAME, "CL_ICDL_NAME", "ICD loader Name", render_string, kind="loader"
    ),
    TraitDescriptor(
        cl.CL_ICDL_VENDOR, "CL_ICDL_VENDOR", "ICD loader Vendor", render_string, kind="loader"
    ),
    TraitDescriptor(
        cl.CL_ICDL_VERSION, "CL_ICDL_VERSION", "ICD loader Version", render_string, kind="loader"
    ),
    TraitDescriptor(
        cl.CL_ICDL_OCL_VERSION,
        "CL_ICDL_OCL_VERSION",
        "ICD loader Profile",
        render_string,
        kind="loader",
    ),
)
