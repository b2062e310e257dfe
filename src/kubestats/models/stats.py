"""
Kubelet Stats Summary Models
Pydantic models for the payload served by the kubelet /stats/summary endpoint
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class KubeletModel(BaseModel):
    """Base model accepting the kubelet camelCase field names."""
    
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


def _none_as_empty(v):
    # the kubelet serializes empty slices as null
    return [] if v is None else v


class CPUStats(KubeletModel):
    usage_nano_cores: Optional[int] = Field(None, alias="usageNanoCores")
    usage_core_nano_seconds: Optional[int] = Field(None, alias="usageCoreNanoSeconds")


class MemoryStats(KubeletModel):
    available_bytes: Optional[int] = Field(None, alias="availableBytes")
    usage_bytes: Optional[int] = Field(None, alias="usageBytes")
    working_set_bytes: Optional[int] = Field(None, alias="workingSetBytes")
    rss_bytes: Optional[int] = Field(None, alias="rssBytes")
    page_faults: Optional[int] = Field(None, alias="pageFaults")
    major_page_faults: Optional[int] = Field(None, alias="majorPageFaults")


class InterfaceStats(KubeletModel):
    name: str = ""
    rx_bytes: Optional[int] = Field(None, alias="rxBytes")
    rx_errors: Optional[int] = Field(None, alias="rxErrors")
    tx_bytes: Optional[int] = Field(None, alias="txBytes")
    tx_errors: Optional[int] = Field(None, alias="txErrors")


class NetworkStats(InterfaceStats):
    """Default interface counters plus the per-interface breakdown."""
    
    interfaces: List[InterfaceStats] = Field(default_factory=list)
    
    @field_validator("interfaces", mode="before")
    @classmethod
    def interfaces_null_as_empty(cls, v):
        return _none_as_empty(v)


class FsStats(KubeletModel):
    available_bytes: Optional[int] = Field(None, alias="availableBytes")
    capacity_bytes: Optional[int] = Field(None, alias="capacityBytes")
    used_bytes: Optional[int] = Field(None, alias="usedBytes")
    inodes_free: Optional[int] = Field(None, alias="inodesFree")
    inodes: Optional[int] = None
    inodes_used: Optional[int] = Field(None, alias="inodesUsed")


class RuntimeStats(KubeletModel):
    image_fs: Optional[FsStats] = Field(None, alias="imageFs")


class NodeStats(KubeletModel):
    node_name: str = Field("", alias="nodeName")
    cpu: Optional[CPUStats] = None
    memory: Optional[MemoryStats] = None
    network: Optional[NetworkStats] = None
    fs: Optional[FsStats] = None
    runtime: Optional[RuntimeStats] = None


class PodReference(KubeletModel):
    name: str = ""
    namespace: str = ""
    uid: str = ""


class PVCReference(KubeletModel):
    name: str = ""
    namespace: str = ""


class VolumeStats(FsStats):
    """Filesystem counters of one pod volume; the kubelet inlines them next to the name."""
    
    name: str = ""
    pvc_ref: Optional[PVCReference] = Field(None, alias="pvcRef")


class ContainerStats(KubeletModel):
    name: str = ""
    cpu: Optional[CPUStats] = None
    memory: Optional[MemoryStats] = None
    rootfs: Optional[FsStats] = None


class PodStats(KubeletModel):
    pod_ref: PodReference = Field(default_factory=PodReference, alias="podRef")
    network: Optional[NetworkStats] = None
    volume_stats: List[VolumeStats] = Field(default_factory=list, alias="volume")
    containers: List[ContainerStats] = Field(default_factory=list)
    
    @field_validator("volume_stats", "containers", mode="before")
    @classmethod
    def lists_null_as_empty(cls, v):
        return _none_as_empty(v)


class Summary(KubeletModel):
    """One collection cycle's stats snapshot for a node and its pods."""
    
    node: NodeStats = Field(default_factory=NodeStats)
    pods: Optional[List[PodStats]] = None
    
    @classmethod
    def from_json(cls, payload: str) -> "Summary":
        """Decode a raw /stats/summary response body."""
        return cls.model_validate_json(payload)
