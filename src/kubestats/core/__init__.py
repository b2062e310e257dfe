from .exceptions import *
from .base_client import BaseClient
from .utils import *

__all__ = [
    "BaseClient",
    "KubeStatsException",
    "SnapshotException",
    "ExtractionException",
    "EntityLabelException",
    "ClientConnectionException",
    "KubeletException",
    "OneShotGate",
    "retry_with_backoff",
    "setup_logging",
]
