from .k8s_client import KubernetesClient, index_pod_specs, load_pod_specs
from .client_factory import KubernetesClientFactory

__all__ = ["KubernetesClient", "KubernetesClientFactory", "index_pod_specs", "load_pod_specs"]
