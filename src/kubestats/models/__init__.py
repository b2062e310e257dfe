from .stats import *

__all__ = [
    "Summary",
    "NodeStats",
    "PodStats",
    "PodReference",
    "PVCReference",
    "ContainerStats",
    "VolumeStats",
    "FsStats",
    "RuntimeStats",
    "NetworkStats",
    "InterfaceStats",
    "CPUStats",
    "MemoryStats",
]
