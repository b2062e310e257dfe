"""Volume exclusion policy.

Two independent tests decide whether a volume's metrics are dropped. The
name-based test always runs and cannot be switched off. The type-based test
needs the pod spec and the filter settings and honours each switch.
"""

from typing import Optional
import structlog
from kubernetes.client import V1Pod, V1Volume

from kubestats.config.settings import VolumeFilterSettings

logger = structlog.get_logger(__name__)

SERVICE_ACCOUNT_VOLUME_PREFIX = "kube-api-access-"


def should_filter_volume(volume_name: str) -> bool:
    """True for service account token volumes, identified by their name prefix."""
    return volume_name.startswith(SERVICE_ACCOUNT_VOLUME_PREFIX)


def find_pod_volume(pod: V1Pod, volume_name: str) -> Optional[V1Volume]:
    """First volume declared in the pod spec with the given name."""
    if pod.spec is None:
        return None
    for volume in pod.spec.volumes or []:
        if volume.name == volume_name:
            return volume
    return None


def pod_label(pod: V1Pod) -> str:
    if pod.metadata is None:
        return "<unknown>"
    return f"{pod.metadata.namespace}/{pod.metadata.name}"


def should_filter_volume_by_type(volume_name: str,
                                 pod: Optional[V1Pod],
                                 config: Optional[VolumeFilterSettings]) -> bool:
    """Decide from the declared volume source whether the volume is filtered."""
    log = logger.bind(component="volume_filter", volume=volume_name)
    
    if pod is None:
        log.debug("Pod spec not available, skipping type-based filtering")
        return False
    
    if config is None:
        log.debug("Filter config not available, skipping type-based filtering")
        return False
    
    log = log.bind(pod=pod_label(pod))
    volume = find_pod_volume(pod, volume_name)
    if volume is None:
        log.warning("Volume not found in pod spec")
        return False
    
    if config.filter_secret_volumes and volume.secret is not None:
        log.debug("Filtering secret volume")
        return True
    
    if config.filter_configmap_volumes and volume.config_map is not None:
        log.debug("Filtering configmap volume")
        return True
    
    if volume.projected is not None:
        for source in volume.projected.sources or []:
            if config.filter_service_account_volumes and source.service_account_token is not None:
                log.debug("Filtering projected service account token volume")
                return True
            if config.filter_configmap_volumes and source.config_map is not None:
                log.debug("Filtering projected configmap volume")
                return True
    
    log.debug("Not filtering volume, type not matched")
    return False
