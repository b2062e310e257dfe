"""Grouping of a kubelet stats summary into per-entity raw metric records."""

from typing import Dict, List, Optional, Tuple
import structlog
from kubernetes.client import V1Pod

from kubestats.config.settings import VolumeFilterSettings
from kubestats.core.exceptions import ExtractionException, SnapshotException
from kubestats.core.utils import OneShotGate
from kubestats.models.stats import PodStats, Summary
from .azure_volumes import enrich_azure_volume_metrics, get_azure_volume_identifier
from .definition import (
    CONTAINER_GROUP,
    NODE_GROUP,
    POD_GROUP,
    VOLUME_GROUP,
    RawGroups,
    RawMetrics,
    new_raw_groups,
)
from .extractors import (
    STATS_SUMMARY_PATH,
    extract_container_stats,
    extract_node_stats,
    extract_pod_stats,
    extract_volume_stats,
)
from .volume_filter import should_filter_volume, should_filter_volume_by_type

logger = structlog.get_logger(__name__)

PodSpecIndex = Dict[str, V1Pod]

# Shared by every cycle in the process, including concurrent ones.
log_config_gate = OneShotGate()


def group_stats_summary(summary: Optional[Summary]) -> Tuple[Optional[RawGroups], List[Exception]]:
    """Group node, pod, container and volume data without type-based filtering."""
    return group_stats_summary_with_config(summary, None, None)


def group_stats_summary_with_config(
    summary: Optional[Summary],
    pod_specs: Optional[PodSpecIndex],
    config: Optional[VolumeFilterSettings]
) -> Tuple[Optional[RawGroups], List[Exception]]:
    """Group a stats summary, filtering and deduplicating volumes.
    
    Service account token volumes are always dropped by name. When both
    ``pod_specs`` and ``config`` are given, volumes are also filtered by their
    declared type, and Azure volumes shared by several pods are reported once
    if ``config.deduplicate_azure_volumes`` is set.
    
    Returns:
        The grouped records and the non-fatal errors met along the way. A
        missing summary yields ``None`` and a single error.
    """
    if summary is None:
        return None, [SnapshotException("got nil stats summary")]
    
    if log_config_gate.fire():
        _log_configuration(pod_specs, config)
    
    return SummaryGrouper(pod_specs, config).group(summary)


class SummaryGrouper:
    """State of a single collection cycle.
    
    Each instance owns its Azure deduplication tracker, so an instance must
    not be reused for another summary.
    """
    
    def __init__(self, pod_specs: Optional[PodSpecIndex], config: Optional[VolumeFilterSettings]):
        self.pod_specs = pod_specs
        self.config = config
        self.filter_by_type = config is not None and pod_specs is not None
        self.dedupe_azure = self.filter_by_type and config.deduplicate_azure_volumes
        # azure volume identity -> raw ID of the first pod reporting it
        self.seen_azure_volumes: Dict[str, str] = {}
        self.groups: RawGroups = new_raw_groups()
        self.errors: List[Exception] = []
        self.logger = logger.bind(grouper="stats_summary")
    
    def group(self, summary: Summary) -> Tuple[RawGroups, List[Exception]]:
        try:
            node_metrics, node_id = extract_node_stats(summary.node)
            self.groups[NODE_GROUP][node_id] = node_metrics
        except ExtractionException as e:
            self.errors.append(e)
        
        if summary.pods is None:
            self.errors.append(SnapshotException(
                f"pods data not found, possible data error in {STATS_SUMMARY_PATH} response"
            ))
            return self.groups, self.errors
        
        for pod in summary.pods:
            try:
                pod_metrics, pod_id = extract_pod_stats(pod)
            except ExtractionException as e:
                self.errors.append(e)
                continue
            
            self.groups[POD_GROUP][pod_id] = pod_metrics
            self._group_volumes(pod, pod_id, pod_metrics)
            self._group_containers(pod, pod_metrics)
        
        if self.dedupe_azure and self.seen_azure_volumes:
            self.logger.debug("Azure volume deduplication summary", unique_volumes=len(self.seen_azure_volumes))
            for azure_id, first_pod in self.seen_azure_volumes.items():
                self.logger.debug("Azure volume reported", azure_volume=azure_id, pod=first_pod)
        
        return self.groups, self.errors
    
    def _group_volumes(self, pod: PodStats, pod_id: str, pod_metrics: RawMetrics) -> None:
        pod_spec = self.pod_specs.get(pod_id) if self.pod_specs is not None else None
        
        for volume in pod.volume_stats:
            self.logger.debug("Processing volume", volume=volume.name, pod=pod_id)
            
            if should_filter_volume(volume.name):
                continue
            
            if self.filter_by_type and should_filter_volume_by_type(volume.name, pod_spec, self.config):
                continue
            
            azure_id = ""
            if self.dedupe_azure:
                azure_id = get_azure_volume_identifier(volume.name, pod_spec)
                if azure_id and self._is_duplicate(azure_id, pod_id):
                    continue
            
            try:
                volume_metrics = extract_volume_stats(volume)
            except ExtractionException as e:
                self.errors.append(e)
                continue
            
            if azure_id:
                enrich_azure_volume_metrics(volume_metrics, volume.name, pod_spec)
            
            self._attach_to_pod(volume_metrics, pod_metrics)
            volume_id = f"{pod_metrics['namespace']}_{pod_metrics['podName']}_{volume_metrics['volumeName']}"
            self.groups[VOLUME_GROUP][volume_id] = volume_metrics
    
    def _group_containers(self, pod: PodStats, pod_metrics: RawMetrics) -> None:
        for container in pod.containers:
            try:
                container_metrics = extract_container_stats(container)
            except ExtractionException as e:
                self.errors.append(e)
                continue
            
            self._attach_to_pod(container_metrics, pod_metrics)
            container_id = f"{pod_metrics['namespace']}_{pod_metrics['podName']}_{container_metrics['containerName']}"
            self.groups[CONTAINER_GROUP][container_id] = container_metrics
    
    def _is_duplicate(self, azure_id: str, pod_id: str) -> bool:
        """Check the tracker, registering ``azure_id`` for ``pod_id`` on first sight."""
        first_pod = self.seen_azure_volumes.get(azure_id)
        if first_pod is not None:
            self.logger.debug(
                "Skipping duplicate Azure volume",
                azure_volume=azure_id, first_pod=first_pod, pod=pod_id
            )
            return True
        
        self.seen_azure_volumes[azure_id] = pod_id
        self.logger.debug("Reporting Azure volume for the first time", azure_volume=azure_id, pod=pod_id)
        return False
    
    @staticmethod
    def _attach_to_pod(record: RawMetrics, pod_metrics: RawMetrics) -> None:
        record["podName"] = pod_metrics["podName"]
        record["namespace"] = pod_metrics["namespace"]


def _log_configuration(pod_specs: Optional[PodSpecIndex], config: Optional[VolumeFilterSettings]) -> None:
    logger.info(
        "Starting volume filtering",
        filter_service_account=config is not None and config.filter_service_account_volumes,
        filter_secret=config is not None and config.filter_secret_volumes,
        filter_configmap=config is not None and config.filter_configmap_volumes,
        deduplicate_azure=config is not None and config.deduplicate_azure_volumes,
    )
    
    if pod_specs is None:
        logger.warning("Pod specs not available, type-based volume filtering is disabled")
    else:
        logger.info(f"Loaded {len(pod_specs)} pod specs on first scrape")
