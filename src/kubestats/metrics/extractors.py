"""Record extractors turning kubelet stats models into flat raw metric records.

Counters are only copied when the kubelet reported them, so a missing field
means "not measured" rather than zero.
"""

from typing import Any, Dict, Optional, Tuple

from kubestats.core.exceptions import ExtractionException
from kubestats.models.stats import (
    ContainerStats,
    FsStats,
    InterfaceStats,
    NetworkStats,
    NodeStats,
    PodStats,
    VolumeStats,
)
from .definition import RawMetrics

STATS_SUMMARY_PATH = "/stats/summary"

_DATA_ERROR = f"possible data error in {STATS_SUMMARY_PATH} response"

_FS_FIELDS = (
    ("AvailableBytes", "available_bytes"),
    ("CapacityBytes", "capacity_bytes"),
    ("UsedBytes", "used_bytes"),
    ("InodesFree", "inodes_free"),
    ("Inodes", "inodes"),
    ("InodesUsed", "inodes_used"),
)


def add_raw_metric(record: RawMetrics, name: str, value: Optional[Any]) -> None:
    """Set ``name`` on the record only when a value was reported."""
    if value is not None:
        record[name] = value


def extract_node_stats(node: NodeStats) -> Tuple[RawMetrics, str]:
    """Extract node metrics, returning the record and the node name as raw entity ID."""
    if not node.node_name:
        raise ExtractionException("node", _DATA_ERROR)
    
    record: RawMetrics = {"nodeName": node.node_name}
    
    if node.cpu is not None:
        add_raw_metric(record, "usageNanoCores", node.cpu.usage_nano_cores)
        add_raw_metric(record, "usageCoreNanoSeconds", node.cpu.usage_core_nano_seconds)
    
    if node.memory is not None:
        add_raw_metric(record, "memoryUsageBytes", node.memory.usage_bytes)
        add_raw_metric(record, "memoryAvailableBytes", node.memory.available_bytes)
        add_raw_metric(record, "memoryWorkingSetBytes", node.memory.working_set_bytes)
        add_raw_metric(record, "memoryRssBytes", node.memory.rss_bytes)
        add_raw_metric(record, "memoryPageFaults", node.memory.page_faults)
        add_raw_metric(record, "memoryMajorPageFaults", node.memory.major_page_faults)
    
    if node.network is not None:
        _add_network_metrics(record, node.network)
    
    _add_fs_metrics(record, "fs", node.fs)
    if node.runtime is not None:
        _add_fs_metrics(record, "runtime", node.runtime.image_fs)
    
    return record, node.node_name


def extract_pod_stats(pod: PodStats) -> Tuple[RawMetrics, str]:
    """Extract pod metrics, returning the record and ``{namespace}_{podName}``."""
    if not pod.pod_ref.name or not pod.pod_ref.namespace:
        raise ExtractionException("pod", _DATA_ERROR)
    
    record: RawMetrics = {
        "podName": pod.pod_ref.name,
        "namespace": pod.pod_ref.namespace,
    }
    
    if pod.network is not None:
        _add_network_metrics(record, pod.network)
    
    return record, f"{pod.pod_ref.namespace}_{pod.pod_ref.name}"


def extract_container_stats(container: ContainerStats) -> RawMetrics:
    if not container.name:
        raise ExtractionException("container", _DATA_ERROR)
    
    record: RawMetrics = {"containerName": container.name}
    
    if container.cpu is not None:
        add_raw_metric(record, "usageNanoCores", container.cpu.usage_nano_cores)
    if container.memory is not None:
        add_raw_metric(record, "usageBytes", container.memory.usage_bytes)
        add_raw_metric(record, "workingSetBytes", container.memory.working_set_bytes)
    _add_fs_metrics(record, "fs", container.rootfs)
    
    return record


def extract_volume_stats(volume: VolumeStats) -> RawMetrics:
    if not volume.name:
        raise ExtractionException("volume", _DATA_ERROR)
    
    record: RawMetrics = {"volumeName": volume.name}
    if volume.pvc_ref is not None:
        record["pvcName"] = volume.pvc_ref.name
        record["pvcNamespace"] = volume.pvc_ref.namespace
    
    _add_fs_metrics(record, "fs", volume)
    
    return record


def _add_fs_metrics(record: RawMetrics, prefix: str, fs: Optional[FsStats]) -> None:
    if fs is None:
        return
    for suffix, attribute in _FS_FIELDS:
        add_raw_metric(record, f"{prefix}{suffix}", getattr(fs, attribute))


def _add_network_metrics(record: RawMetrics, network: NetworkStats) -> None:
    record.update(_interface_metrics(network))
    
    interfaces: Dict[str, RawMetrics] = {}
    for interface in network.interfaces:
        interfaces[interface.name] = _interface_metrics(interface)
    record["interfaces"] = interfaces


def _interface_metrics(interface: InterfaceStats) -> RawMetrics:
    metrics: RawMetrics = {}
    add_raw_metric(metrics, "rxBytes", interface.rx_bytes)
    add_raw_metric(metrics, "txBytes", interface.tx_bytes)
    # errors is only meaningful when both directions were reported
    if interface.rx_errors is not None and interface.tx_errors is not None:
        metrics["errors"] = interface.rx_errors + interface.tx_errors
    return metrics
