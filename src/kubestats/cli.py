# src/kubestats/cli.py
"""Grouping CLI - turn a kubelet stats summary into entity-keyed metric records."""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
import structlog
import yaml
from pydantic import ValidationError

from kubestats.clients.kubernetes import KubernetesClientFactory, index_pod_specs, load_pod_specs
from kubestats.config.settings import Settings
from kubestats.core.exceptions import KubeStatsException
from kubestats.core.utils import setup_logging
from kubestats.metrics.grouping import group_stats_summary_with_config
from kubestats.models.stats import Summary

logger = structlog.get_logger(__name__)


@click.group()
def cli():
    """kubestats - kubelet stats grouping and volume filtering."""


@cli.command()
@click.option('--summary', 'summary_path', type=click.Path(exists=True, dir_okay=False),
              help='Stats summary JSON file; fetched from the node when omitted')
@click.option('--pods', 'pods_path', type=click.Path(exists=True, dir_okay=False),
              help='PodList manifest (JSON or YAML) used for type-based filtering')
@click.option('--node', help='Node to scrape through the API server (default: K8S_NODE_NAME)')
@click.option('--filter-secrets/--no-filter-secrets', default=None, help='Filter Secret volumes')
@click.option('--filter-configmaps/--no-filter-configmaps', default=None, help='Filter ConfigMap volumes')
@click.option('--filter-service-accounts/--no-filter-service-accounts', default=None,
              help='Filter projected service account token volumes')
@click.option('--dedupe-azure/--no-dedupe-azure', default=None,
              help='Report shared Azure File shares and Azure Disks once')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output JSON file path (default: stdout)')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def group(summary_path, pods_path, node, filter_secrets, filter_configmaps,
          filter_service_accounts, dedupe_azure, output, debug):
    """
    Group a kubelet /stats/summary snapshot into node, pod, container and
    volume records.
    
    Filter switches default to the KUBELET_* environment settings, e.g.:
        KUBELET_FILTER_SECRET_VOLUMES=true
        KUBELET_DEDUPLICATE_AZURE_VOLUMES=true
    
    Example:
        kubestats group --summary summary.json --pods pods.yaml --dedupe-azure
    """
    settings = Settings.create_from_env()
    log_level = "DEBUG" if debug or settings.debug else settings.log_level.value
    setup_logging(config_path=settings.log_config_path, log_level=log_level, log_format=settings.log_format.value)
    
    overrides = {
        'filter_secret_volumes': filter_secrets,
        'filter_configmap_volumes': filter_configmaps,
        'filter_service_account_volumes': filter_service_accounts,
        'deduplicate_azure_volumes': dedupe_azure,
    }
    filter_config = settings.kubelet.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    node_name = node or settings.kubernetes.node_name
    
    try:
        summary, pod_specs = _load_inputs(settings, summary_path, pods_path, node_name)
    except (KubeStatsException, ValidationError) as e:
        raise click.ClickException(str(e))
    
    groups, errors = group_stats_summary_with_config(summary, pod_specs, filter_config)
    for error in errors:
        logger.warning("Stats grouping error", error=str(error))
    
    result = {
        'groups': groups,
        'errors': [str(e) for e in errors],
    }
    payload = json.dumps(result, indent=2, default=str)
    
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload)
        click.echo(f"Grouped metrics saved to: {output_path}")
    else:
        click.echo(payload)


def _load_inputs(settings: Settings,
                 summary_path: Optional[str],
                 pods_path: Optional[str],
                 node_name: Optional[str]) -> Tuple[Summary, Optional[Dict[str, Any]]]:
    summary = Summary.from_json(Path(summary_path).read_text()) if summary_path else None
    pod_specs = index_pod_specs(load_pod_specs(_read_manifest(pods_path))) if pods_path else None
    
    if summary is not None and (pod_specs is not None or not node_name):
        return summary, pod_specs
    
    if not node_name:
        raise click.UsageError("either --summary or --node is required")
    
    live_summary, live_pods = asyncio.run(_fetch_from_node(settings, node_name, fetch_summary=summary is None))
    if pod_specs is None:
        pod_specs = index_pod_specs(live_pods)
    return (summary if summary is not None else live_summary), pod_specs


async def _fetch_from_node(settings: Settings, node_name: str, fetch_summary: bool):
    factory = KubernetesClientFactory(settings.kubernetes)
    async with factory.create_client() as k8s:
        summary = await k8s.fetch_stats_summary(node_name) if fetch_summary else None
        pods = await k8s.list_node_pods(node_name)
    return summary, pods


def _read_manifest(path: str) -> Any:
    with open(path, 'r') as f:
        return yaml.safe_load(f)


if __name__ == '__main__':
    cli()
