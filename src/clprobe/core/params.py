from __future__ import annotations

# Status codes
CL_SUCCESS = 0
CL_DEVICE_NOT_FOUND = -1
CL_BUILD_PROGRAM_FAILURE = -11
CL_INVALID_VALUE = -30
CL_INVALID_OPERATION = -59
CL_PLATFORM_NOT_FOUND_KHR = -1001

# Platform info
CL_PLATFORM_PROFILE = 0x0900
CL_PLATFORM_VERSION = 0x0901
CL_PLATFORM_NAME = 0x0902
CL_PLATFORM_VENDOR = 0x0903
CL_PLATFORM_EXTENSIONS = 0x0904
CL_PLATFORM_HOST_TIMER_RESOLUTION = 0x0905
CL_PLATFORM_ICD_SUFFIX_KHR = 0x0920

# Device info, core
CL_DEVICE_TYPE = 0x1000
CL_DEVICE_VENDOR_ID = 0x1001
CL_DEVICE_MAX_COMPUTE_UNITS = 0x1002
CL_DEVICE_MAX_WORK_ITEM_DIMENSIONS = 0x1003
CL_DEVICE_MAX_WORK_GROUP_SIZE = 0x1004
CL_DEVICE_MAX_WORK_ITEM_SIZES = 0x1005
CL_DEVICE_PREFERRED_VECTOR_WIDTH_CHAR = 0x1006
CL_DEVICE_PREFERRED_VECTOR_WIDTH_SHORT = 0x1007
CL_DEVICE_PREFERRED_VECTOR_WIDTH_INT = 0x1008
CL_DEVICE_PREFERRED_VECTOR_WIDTH_LONG = 0x1009
CL_DEVICE_PREFERRED_VECTOR_WIDTH_FLOAT = 0x100A
CL_DEVICE_PREFERRED_VECTOR_WIDTH_DOUBLE = 0x100B
CL_DEVICE_MAX_CLOCK_FREQUENCY = 0x100C
CL_DEVICE_ADDRESS_BITS = 0x100D
CL_DEVICE_MAX_READ_IMAGE_ARGS = 0x100E
CL_DEVICE_MAX_WRITE_IMAGE_ARGS = 0x100F
CL_DEVICE_MAX_MEM_ALLOC_SIZE = 0x1010
CL_DEVICE_IMAGE2D_MAX_WIDTH = 0x1011
CL_DEVICE_IMAGE2D_MAX_HEIGHT = 0x1012
CL_DEVICE_IMAGE3D_MAX_WIDTH = 0x1013
CL_DEVICE_IMAGE3D_MAX_HEIGHT = 0x1014
CL_DEVICE_IMAGE3D_MAX_DEPTH = 0x1015
CL_DEVICE_IMAGE_SUPPORT = 0x1016
CL_DEVICE_MAX_PARAMETER_SIZE = 0x1017
CL_DEVICE_MAX_SAMPLERS = 0x1018
CL_DEVICE_MEM_BASE_ADDR_ALIGN = 0x1019
CL_DEVICE_MIN_DATA_TYPE_ALIGN_SIZE = 0x101A
CL_DEVICE_SINGLE_FP_CONFIG = 0x101B
CL_DEVICE_GLOBAL_MEM_CACHE_TYPE = 0x101C
CL_DEVICE_GLOBAL_MEM_CACHELINE_SIZE = 0x101D
CL_DEVICE_GLOBAL_MEM_CACHE_SIZE = 0x101E
CL_DEVICE_GLOBAL_MEM_SIZE = 0x101F
CL_DEVICE_MAX_CONSTANT_BUFFER_SIZE = 0x1020
CL_DEVICE_MAX_CONSTANT_ARGS = 0x1021
CL_DEVICE_LOCAL_MEM_TYPE = 0x1022
CL_DEVICE_LOCAL_MEM_SIZE = 0x1023
CL_DEVICE_ERROR_CORRECTION_SUPPORT = 0x1024
CL_DEVICE_PROFILING_TIMER_RESOLUTION = 0x1025
CL_DEVICE_ENDIAN_LITTLE = 0x1026
CL_DEVICE_AVAILABLE = 0x1027
CL_DEVICE_COMPILER_AVAILABLE = 0x1028
CL_DEVICE_EXECUTION_CAPABILITIES = 0x1029
CL_DEVICE_QUEUE_PROPERTIES = 0x102A
CL_DEVICE_NAME = 0x102B
CL_DEVICE_VENDOR = 0x102C
CL_DRIVER_VERSION = 0x102D
CL_DEVICE_PROFILE = 0x102E
CL_DEVICE_VERSION = 0x102F
CL_DEVICE_EXTENSIONS = 0x1030
CL_DEVICE_DOUBLE_FP_CONFIG = 0x1032
CL_DEVICE_HALF_FP_CONFIG = 0x1033
CL_DEVICE_PREFERRED_VECTOR_WIDTH_HALF = 0x1034
CL_DEVICE_HOST_UNIFIED_MEMORY = 0x1035
CL_DEVICE_NATIVE_VECTOR_WIDTH_CHAR = 0x1036
CL_DEVICE_NATIVE_VECTOR_WIDTH_SHORT = 0x1037
CL_DEVICE_NATIVE_VECTOR_WIDTH_INT = 0x1038
CL_DEVICE_NATIVE_VECTOR_WIDTH_LONG = 0x1039
CL_DEVICE_NATIVE_VECTOR_WIDTH_FLOAT = 0x103A
CL_DEVICE_NATIVE_VECTOR_WIDTH_DOUBLE = 0x103B
CL_DEVICE_NATIVE_VECTOR_WIDTH_HALF = 0x103C
CL_DEVICE_OPENCL_C_VERSION = 0x103D
CL_DEVICE_LINKER_AVAILABLE = 0x103E
CL_DEVICE_BUILT_IN_KERNELS = 0x103F
CL_DEVICE_IMAGE_MAX_BUFFER_SIZE = 0x1040
CL_DEVICE_IMAGE_MAX_ARRAY_SIZE = 0x1041
CL_DEVICE_PARTITION_MAX_SUB_DEVICES = 0x1043
CL_DEVICE_PARTITION_PROPERTIES = 0x1044
CL_DEVICE_PARTITION_AFFINITY_DOMAIN = 0x1045
CL_DEVICE_PARTITION_TYPE = 0x1046
CL_DEVICE_PREFERRED_INTEROP_USER_SYNC = 0x1048
CL_DEVICE_PRINTF_BUFFER_SIZE = 0x1049
CL_DEVICE_IMAGE_PITCH_ALIGNMENT = 0x104A
CL_DEVICE_IMAGE_BASE_ADDRESS_ALIGNMENT = 0x104B
CL_DEVICE_MAX_READ_WRITE_IMAGE_ARGS = 0x104C
CL_DEVICE_MAX_GLOBAL_VARIABLE_SIZE = 0x104D
CL_DEVICE_QUEUE_ON_DEVICE_PROPERTIES = 0x104E
CL_DEVICE_QUEUE_ON_DEVICE_PREFERRED_SIZE = 0x104F
CL_DEVICE_QUEUE_ON_DEVICE_MAX_SIZE = 0x1050
CL_DEVICE_MAX_ON_DEVICE_QUEUES = 0x1051
CL_DEVICE_MAX_ON_DEVICE_EVENTS = 0x1052
CL_DEVICE_SVM_CAPABILITIES = 0x1053
CL_DEVICE_GLOBAL_VARIABLE_PREFERRED_TOTAL_SIZE = 0x1054
CL_DEVICE_MAX_PIPE_ARGS = 0x1055
CL_DEVICE_PIPE_MAX_ACTIVE_RESERVATIONS = 0x1056
CL_DEVICE_PIPE_MAX_PACKET_SIZE = 0x1057
CL_DEVICE_IL_VERSION = 0x105B
CL_DEVICE_MAX_NUM_SUB_GROUPS = 0x105C

# cl_nv_device_attribute_query
CL_DEVICE_COMPUTE_CAPABILITY_MAJOR_NV = 0x4000
CL_DEVICE_COMPUTE_CAPABILITY_MINOR_NV = 0x4001
CL_DEVICE_REGISTERS_PER_BLOCK_NV = 0x4002
CL_DEVICE_WARP_SIZE_NV = 0x4003
CL_DEVICE_GPU_OVERLAP_NV = 0x4004
CL_DEVICE_KERNEL_EXEC_TIMEOUT_NV = 0x4005
CL_DEVICE_INTEGRATED_MEMORY_NV = 0x4006

# cl_ext_atomic_counters_{32,64}
CL_DEVICE_MAX_ATOMIC_COUNTERS_EXT = 0x4032

# cl_amd_device_attribute_query
CL_DEVICE_PROFILING_TIMER_OFFSET_AMD = 0x4036
CL_DEVICE_TOPOLOGY_AMD = 0x4037
CL_DEVICE_BOARD_NAME_AMD = 0x4038
CL_DEVICE_GLOBAL_FREE_MEMORY_AMD = 0x4039
CL_DEVICE_SIMD_PER_COMPUTE_UNIT_AMD = 0x4040
CL_DEVICE_SIMD_WIDTH_AMD = 0x4041
CL_DEVICE_SIMD_INSTRUCTION_WIDTH_AMD = 0x4042
CL_DEVICE_WAVEFRONT_WIDTH_AMD = 0x4043
CL_DEVICE_GLOBAL_MEM_CHANNELS_AMD = 0x4044
CL_DEVICE_GLOBAL_MEM_CHANNEL_BANKS_AMD = 0x4045
CL_DEVICE_GLOBAL_MEM_CHANNEL_BANK_WIDTH_AMD = 0x4046
CL_DEVICE_LOCAL_MEM_SIZE_PER_COMPUTE_UNIT_AMD = 0x4047
CL_DEVICE_LOCAL_MEM_BANKS_AMD = 0x4048
CL_DEVICE_GFXIP_MAJOR_AMD = 0x404A
CL_DEVICE_GFXIP_MINOR_AMD = 0x404B
CL_DEVICE_TOPOLOGY_TYPE_PCIE_AMD = 1

# cl_amd_offline_devices
CL_CONTEXT_OFFLINE_DEVICES_AMD = 0x403F

# cl_ext_device_fission
CL_DEVICE_PARTITION_EQUALLY_EXT = 0x4050
CL_DEVICE_PARTITION_BY_COUNTS_EXT = 0x4051
CL_DEVICE_PARTITION_BY_NAMES_EXT = 0x4052
CL_DEVICE_PARTITION_BY_AFFINITY_DOMAIN_EXT = 0x4053
CL_DEVICE_PARENT_DEVICE_EXT = 0x4054
CL_DEVICE_PARTITION_TYPES_EXT = 0x4055
CL_DEVICE_AFFINITY_DOMAINS_EXT = 0x4056

CL_AFFINITY_DOMAIN_L1_CACHE_EXT = 0x1
CL_AFFINITY_DOMAIN_L2_CACHE_EXT = 0x2
CL_AFFINITY_DOMAIN_L3_CACHE_EXT = 0x3
CL_AFFINITY_DOMAIN_L4_CACHE_EXT = 0x4
CL_AFFINITY_DOMAIN_NUMA_EXT = 0x10
CL_AFFINITY_DOMAIN_NEXT_FISSIONABLE_EXT = 0x100

# cl_khr_pci_bus_info
CL_DEVICE_PCI_BUS_INFO_KHR = 0x410F

# cl_qcom_ext_host_ptr
CL_DEVICE_EXT_MEM_PADDING_IN_BYTES_QCOM = 0x40A0
CL_DEVICE_PAGE_SIZE_QCOM = 0x40A1

# cl_arm_shared_virtual_memory
CL_DEVICE_SVM_CAPABILITIES_ARM = 0x40B6

# cl_khr_spir
CL_DEVICE_SPIR_VERSIONS = 0x40E0

# cl_altera_device_temperature
CL_DEVICE_CORE_TEMPERATURE_ALTERA = 0x40F3

# cl_intel_device_attribute_query
CL_DEVICE_IP_VERSION_INTEL = 0x4250
CL_DEVICE_ID_INTEL = 0x4251
CL_DEVICE_NUM_SLICES_INTEL = 0x4252
CL_DEVICE_NUM_SUB_SLICES_PER_SLICE_INTEL = 0x4253
CL_DEVICE_NUM_EUS_PER_SUB_SLICE_INTEL = 0x4254
CL_DEVICE_NUM_THREADS_PER_EU_INTEL = 0x4255

# clGetICDLoaderInfoOCLICD
CL_ICDL_OCL_VERSION = 1
CL_ICDL_VERSION = 2
CL_ICDL_NAME = 3
CL_ICDL_VENDOR = 4

# Partition properties (core 1.2)
CL_DEVICE_PARTITION_EQUALLY = 0x1086
CL_DEVICE_PARTITION_BY_COUNTS = 0x1087
CL_DEVICE_PARTITION_BY_AFFINITY_DOMAIN = 0x1088
CL_DEVICE_PARTITION_BY_NAMES_INTEL = 0x4052

# Flag tables, in declaration order: (bit, human label, symbolic name)
DEVICE_TYPE_FLAGS: tuple[tuple[int, str, str], ...] = (
    (1 << 0, "Default", "CL_DEVICE_TYPE_DEFAULT"),
    (1 << 1, "CPU", "CL_DEVICE_TYPE_CPU"),
    (1 << 2, "GPU", "CL_DEVICE_TYPE_GPU"),
    (1 << 3, "Accelerator", "CL_DEVICE_TYPE_ACCELERATOR"),
    (1 << 4, "Custom", "CL_DEVICE_TYPE_CUSTOM"),
)
CL_DEVICE_TYPE_GPU = 1 << 2

FP_CONFIG_FLAGS: tuple[tuple[int, str, str], ...] = (
    (1 << 0, "Denormals", "CL_FP_DENORM"),
    (1 << 1, "Infinity and NANs", "CL_FP_INF_NAN"),
    (1 << 2, "Round to nearest", "CL_FP_ROUND_TO_NEAREST"),
    (1 << 3, "Round to zero", "CL_FP_ROUND_TO_ZERO"),
    (1 << 4, "Round to infinity", "CL_FP_ROUND_TO_INF"),
    (1 << 5, "IEEE754-2008 fused multiply-add", "CL_FP_FMA"),
    (1 << 6, "Support is emulated in software", "CL_FP_SOFT_FLOAT"),
    (1 << 7, "Correctly-rounded divide and sqrt operations", "CL_FP_CORRECTLY_ROUNDED_DIVIDE_SQRT"),
)
CL_FP_CORRECTLY_ROUNDED_DIVIDE_SQRT = 1 << 7

AFFINITY_DOMAIN_FLAGS: tuple[tuple[int, str, str], ...] = (
    (1 << 0, "NUMA", "CL_DEVICE_AFFINITY_DOMAIN_NUMA"),
    (1 << 1, "L4 cache", "CL_DEVICE_AFFINITY_DOMAIN_L4_CACHE"),
    (1 << 2, "L3 cache", "CL_DEVICE_AFFINITY_DOMAIN_L3_CACHE"),
    (1 << 3, "L2 cache", "CL_DEVICE_AFFINITY_DOMAIN_L2_CACHE"),
    (1 << 4, "L1 cache", "CL_DEVICE_AFFINITY_DOMAIN_L1_CACHE"),
    (1 << 5, "next partitionable", "CL_DEVICE_AFFINITY_DOMAIN_NEXT_PARTITIONABLE"),
)

SVM_CAPABILITY_FLAGS: tuple[tuple[int, str, str], ...] = (
    (1 << 0, "Coarse-grained buffer sharing", "CL_DEVICE_SVM_COARSE_GRAIN_BUFFER"),
    (1 << 1, "Fine-grained buffer sharing", "CL_DEVICE_SVM_FINE_GRAIN_BUFFER"),
    (1 << 2, "Fine-grained system sharing", "CL_DEVICE_SVM_FINE_GRAIN_SYSTEM"),
    (1 << 3, "Atomics", "CL_DEVICE_SVM_ATOMICS"),
)

QUEUE_PROPERTY_FLAGS: tuple[tuple[int, str, str], ...] = (
    (1 << 0, "Out-of-order execution", "CL_QUEUE_OUT_OF_ORDER_EXEC_MODE_ENABLE"),
    (1 << 1, "Profiling", "CL_QUEUE_PROFILING_ENABLE"),
)

EXEC_CAPABILITY_FLAGS: tuple[tuple[int, str, str], ...] = (
    (1 << 0, "Run OpenCL kernels", "CL_EXEC_KERNEL"),
    (1 << 1, "Run native kernels", "CL_EXEC_NATIVE_KERNEL"),
)

# Enumerated values: value -> (human label, symbolic name)
CACHE_TYPES: dict[int, tuple[str, str]] = {
    0: ("None", "CL_NONE"),
    1: ("Read-Only", "CL_READ_ONLY_CACHE"),
    2: ("Read/Write", "CL_READ_WRITE_CACHE"),
}

LOCAL_MEM_TYPES: dict[int, tuple[str, str]] = {
    0: ("None", "CL_NONE"),
    1: ("Local", "CL_LOCAL"),
    2: ("Global", "CL_GLOBAL"),
}

PARTITION_TYPES: dict[int, tuple[str, str]] = {
    0: ("none", "NONE"),
    CL_DEVICE_PARTITION_EQUALLY: ("equally", "CL_DEVICE_PARTITION_EQUALLY"),
    CL_DEVICE_PARTITION_BY_COUNTS: ("by counts", "CL_DEVICE_PARTITION_BY_COUNTS"),
    CL_DEVICE_PARTITION_BY_AFFINITY_DOMAIN: (
        "by affinity domain",
        "CL_DEVICE_PARTITION_BY_AFFINITY_DOMAIN",
    ),
    CL_DEVICE_PARTITION_BY_NAMES_INTEL: (
        "by name (Intel extension)",
        "CL_DEVICE_PARTITION_BY_NAMES_INTEL",
    ),
}

PARTITION_TYPES_EXT: dict[int, tuple[str, str]] = {
    0: ("none", "NONE"),
    CL_DEVICE_PARTITION_EQUALLY_EXT: ("equally", "CL_DEVICE_PARTITION_EQUALLY_EXT"),
    CL_DEVICE_PARTITION_BY_COUNTS_EXT: ("by counts", "CL_DEVICE_PARTITION_BY_COUNTS_EXT"),
    CL_DEVICE_PARTITION_BY_NAMES_EXT: ("by names", "CL_DEVICE_PARTITION_BY_NAMES_EXT"),
    CL_DEVICE_PARTITION_BY_AFFINITY_DOMAIN_EXT: (
        "by affinity domain",
        "CL_DEVICE_PARTITION_BY_AFFINITY_DOMAIN_EXT",
    ),
}

AFFINITY_DOMAINS_EXT: dict[int, tuple[str, str]] = {
    CL_AFFINITY_DOMAIN_L1_CACHE_EXT: ("L1 cache", "CL_AFFINITY_DOMAIN_L1_CACHE_EXT"),
    CL_AFFINITY_DOMAIN_L2_CACHE_EXT: ("L2 cache", "CL_AFFINITY_DOMAIN_L2_CACHE_EXT"),
    CL_AFFINITY_DOMAIN_L3_CACHE_EXT: ("L3 cache", "CL_AFFINITY_DOMAIN_L3_CACHE_EXT"),
    CL_AFFINITY_DOMAIN_L4_CACHE_EXT: ("L4 cache", "CL_AFFINITY_DOMAIN_L4_CACHE_EXT"),
    CL_AFFINITY_DOMAIN_NUMA_EXT: ("NUMA", "CL_AFFINITY_DOMAIN_NUMA_EXT"),
    CL_AFFINITY_DOMAIN_NEXT_FISSIONABLE_EXT: (
        "next fissionable",
        "CL_AFFINITY_DOMAIN_NEXT_FISSIONABLE_EXT",
    ),
}
