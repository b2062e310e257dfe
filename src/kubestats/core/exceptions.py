"""Custom exceptions for kubestats."""

from typing import Optional, Dict, Any


class KubeStatsException(Exception):
    """Base exception for kubestats."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class SnapshotException(KubeStatsException):
    """Raised when the stats summary snapshot is missing or structurally broken."""
    pass


class ExtractionException(KubeStatsException):
    """Raised when a single node, pod, container or volume cannot be extracted."""
    
    def __init__(self, entity_type: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.entity_type = entity_type
        super().__init__(f"empty {entity_type} identifier, {message}", details)


class EntityLabelException(KubeStatsException):
    """Raised when an entity ID or entity type cannot be generated from raw groups."""
    pass


class ClientConnectionException(KubeStatsException):
    """Raised when client connections fail."""
    
    def __init__(self, client_type: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.client_type = client_type
        super().__init__(f"{client_type} connection failed: {message}", details)


class KubeletException(KubeStatsException):
    """Raised when the kubelet stats endpoint returns an unusable response."""
    
    def __init__(self, message: str, status: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        self.status = status
        super().__init__(message, details)
