"""Identity and metadata for Azure File and Azure Disk backed volumes.

Several pods can mount the same share or disk. The identity lets one
collection cycle report each underlying Azure resource once.
"""

from typing import Optional
from kubernetes.client import V1Pod

from .definition import RawMetrics
from .volume_filter import find_pod_volume

AZURE_FILE_TYPE = "azureFile"
AZURE_DISK_TYPE = "azureDisk"


def get_azure_volume_identifier(volume_name: str, pod: Optional[V1Pod]) -> str:
    """Stable identifier of the Azure resource behind a pod volume.
    
    Returns:
        ``azurefile:{namespace}:{secretName}:{shareName}`` for Azure File,
        ``azuredisk:name:{diskName}`` or ``azuredisk:uri:{diskURI}`` for
        Azure Disk, and an empty string for anything else.
    """
    if pod is None:
        return ""
    
    volume = find_pod_volume(pod, volume_name)
    if volume is None:
        return ""
    
    if volume.azure_file is not None:
        # share names are only unique within the secret's namespace
        namespace = pod.metadata.namespace if pod.metadata else ""
        return f"azurefile:{namespace}:{volume.azure_file.secret_name}:{volume.azure_file.share_name}"
    
    if volume.azure_disk is not None:
        if volume.azure_disk.disk_name:
            return f"azuredisk:name:{volume.azure_disk.disk_name}"
        if volume.azure_disk.disk_uri:
            return f"azuredisk:uri:{volume.azure_disk.disk_uri}"
    
    return ""


def enrich_azure_volume_metrics(record: RawMetrics, volume_name: str, pod: Optional[V1Pod]) -> None:
    """Attach Azure volume metadata to an extracted volume record in place."""
    if pod is None:
        return
    
    volume = find_pod_volume(pod, volume_name)
    if volume is None:
        return
    
    if volume.azure_file is not None:
        record["azureVolumeType"] = AZURE_FILE_TYPE
        record["azureShareName"] = volume.azure_file.share_name
        record["azureSecretName"] = volume.azure_file.secret_name
        record["azureReadOnly"] = bool(volume.azure_file.read_only)
    
    if volume.azure_disk is not None:
        disk = volume.azure_disk
        record["azureVolumeType"] = AZURE_DISK_TYPE
        if disk.disk_name:
            record["azureDiskName"] = disk.disk_name
        if disk.disk_uri:
            record["azureDiskURI"] = disk.disk_uri
        if disk.fs_type is not None:
            record["azureFSType"] = disk.fs_type
        if disk.read_only is not None:
            record["azureReadOnly"] = disk.read_only
