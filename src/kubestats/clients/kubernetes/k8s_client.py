# src/kubestats/clients/kubernetes/k8s_client.py
"""Kubernetes client fetching kubelet stats summaries and pod specs for one node."""

import json
from typing import Any, Dict, Iterable, List, Optional, Union
import yaml
import structlog
from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from pydantic import ValidationError

from kubestats.core.base_client import BaseClient
from kubestats.core.exceptions import ClientConnectionException, KubeletException
from kubestats.core.utils import retry_with_backoff
from kubestats.metrics.extractors import STATS_SUMMARY_PATH
from kubestats.models.stats import Summary

logger = structlog.get_logger(__name__)

TRANSIENT_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def is_transient_error(exc: BaseException) -> bool:
    """True for API server or kubelet responses worth retrying."""
    if isinstance(exc, KubeletException):
        return exc.status in TRANSIENT_STATUS_CODES
    if isinstance(exc, ClientConnectionException):
        return exc.details.get("status") in TRANSIENT_STATUS_CODES
    return False


class KubernetesClient(BaseClient):
    """Kubernetes client scoped to the pods and kubelet of a node."""
    
    def __init__(self, 
                 config_dict: Dict[str, Any],
                 kubeconfig_path: Optional[str] = None,
                 context: Optional[str] = None,
                 kubeconfig_data: Optional[bytes] = None):
        super().__init__(config_dict, "KubernetesClient")
        self.kubeconfig_path = kubeconfig_path
        self.context = context
        self.kubeconfig_data = kubeconfig_data
        self.cluster_name = config_dict.get("cluster_name", "unknown")
        self.request_timeout = config_dict.get("request_timeout_seconds", 30)
        
        self.v1: Optional[client.CoreV1Api] = None
    
    async def connect(self) -> None:
        """Connect to the Kubernetes API server."""
        try:
            if self.kubeconfig_data:
                kubeconfig_dict = yaml.safe_load(self.kubeconfig_data.decode('utf-8'))
                config.load_kube_config_from_dict(kubeconfig_dict, context=self.context)
                self.logger.info("Loaded kubeconfig from provided data")
            elif self.kubeconfig_path:
                config.load_kube_config(config_file=self.kubeconfig_path, context=self.context)
                self.logger.info(f"Loaded kubeconfig from {self.kubeconfig_path}")
            else:
                try:
                    config.load_kube_config(context=self.context)
                    self.logger.info("Loaded default kubeconfig")
                except ConfigException:
                    config.load_incluster_config()
                    self.logger.info("Loaded in-cluster configuration")
            
            self.v1 = client.CoreV1Api()
            self._connected = True
            self.logger.info(f"Kubernetes client connected to cluster: {self.cluster_name}")
            
        except Exception as e:
            raise ClientConnectionException("Kubernetes", f"Connection failed: {e}")
    
    async def disconnect(self) -> None:
        """Disconnect from the Kubernetes API server."""
        self._connected = False
        self.v1 = None
        self.logger.info("Kubernetes client disconnected")
    
    async def health_check(self) -> bool:
        """Check Kubernetes client health."""
        try:
            if not self._connected or not self.v1:
                return False
            self.v1.get_api_resources()
            return True
        except Exception as e:
            self.logger.warning("Kubernetes health check failed", error=str(e))
            return False
    
    @retry_with_backoff(max_retries=3, retry_on=is_transient_error)
    async def fetch_stats_summary(self, node_name: str) -> Summary:
        """Fetch the kubelet stats summary of a node through the API server proxy."""
        self._ensure_connected()
        
        try:
            response = self.v1.connect_get_node_proxy_with_path(
                node_name,
                STATS_SUMMARY_PATH.lstrip('/'),
                _preload_content=False,
                _request_timeout=self.request_timeout
            )
        except ApiException as e:
            raise KubeletException(
                f"received non-OK response code from kubelet: {e.status}: response body: {e.body}",
                status=e.status,
                details={'node': node_name}
            )
        
        body = response.data
        if response.status != 200:
            raise KubeletException(
                f"received non-OK response code from kubelet: {response.status}: response body: {body!r}",
                status=response.status,
                details={'node': node_name}
            )
        
        try:
            summary = Summary.from_json(body)
        except ValidationError as e:
            raise KubeletException(
                f"unmarshaling the response body into kubelet stats Summary: {e}",
                status=response.status,
                details={'node': node_name}
            )
        
        self.logger.debug("Fetched stats summary", node=node_name, pods=len(summary.pods or []))
        return summary
    
    @retry_with_backoff(max_retries=3, retry_on=is_transient_error)
    async def list_node_pods(self, node_name: str) -> List[client.V1Pod]:
        """List the pods scheduled on a node."""
        self._ensure_connected()
        
        try:
            pod_list = self.v1.list_pod_for_all_namespaces(
                field_selector=f"spec.nodeName={node_name}",
                _request_timeout=self.request_timeout
            )
        except ApiException as e:
            raise ClientConnectionException(
                "Kubernetes",
                f"Failed to list pods on node {node_name}: {e}",
                details={"node": node_name, "status": e.status}
            )
        
        self.logger.info(f"Discovered {len(pod_list.items)} pods on node {node_name}")
        return pod_list.items
    
    def _ensure_connected(self) -> None:
        if not self._connected or self.v1 is None:
            raise ClientConnectionException("Kubernetes", "Client not connected")


def index_pod_specs(pods: Iterable[client.V1Pod]) -> Dict[str, client.V1Pod]:
    """Index pods by ``{namespace}_{podName}``, the raw pod ID used while grouping."""
    index = {}
    for pod in pods:
        if pod.metadata is None or not pod.metadata.name or not pod.metadata.namespace:
            continue
        index[f"{pod.metadata.namespace}_{pod.metadata.name}"] = pod
    return index


def load_pod_specs(data: Union[Dict[str, Any], List[Dict[str, Any]]]) -> List[client.V1Pod]:
    """Turn a PodList manifest, or a plain list of pod manifests, into ``V1Pod`` models."""
    items = data.get('items', []) if isinstance(data, dict) else data
    api_client = client.ApiClient()
    return [api_client.deserialize(json.dumps(item), "V1Pod", "application/json") for item in items]
