from .definition import *
from .extractors import *
from .volume_filter import should_filter_volume, should_filter_volume_by_type
from .azure_volumes import get_azure_volume_identifier, enrich_azure_volume_metrics
from .grouping import group_stats_summary, group_stats_summary_with_config, SummaryGrouper

__all__ = [
    "RawMetrics",
    "RawGroups",
    "new_raw_groups",
    "extract_node_stats",
    "extract_pod_stats",
    "extract_container_stats",
    "extract_volume_stats",
    "should_filter_volume",
    "should_filter_volume_by_type",
    "get_azure_volume_identifier",
    "enrich_azure_volume_metrics",
    "group_stats_summary",
    "group_stats_summary_with_config",
    "SummaryGrouper",
    "from_raw_groups_entity_id_generator",
    "from_raw_entity_id_group_entity_id_generator",
    "from_raw_groups_entity_type_generator",
    "from_label_get_namespace",
]
