# src/kubestats/clients/kubernetes/client_factory.py
"""Kubernetes client factory."""

from typing import Optional
import structlog

from kubestats.config.settings import KubernetesSettings
from .k8s_client import KubernetesClient

logger = structlog.get_logger(__name__)


class KubernetesClientFactory:
    """Factory for creating Kubernetes clients."""
    
    def __init__(self, settings: KubernetesSettings):
        self.settings = settings
        self.logger = logger.bind(factory="kubernetes")
    
    def create_client(self, kubeconfig_data: Optional[bytes] = None) -> KubernetesClient:
        """Create a Kubernetes client from settings."""
        self.logger.debug("Creating Kubernetes client", context=self.settings.context)
        return KubernetesClient(
            config_dict=self.settings.model_dump(),
            kubeconfig_path=self.settings.kubeconfig_path,
            context=self.settings.context,
            kubeconfig_data=kubeconfig_data
        )
