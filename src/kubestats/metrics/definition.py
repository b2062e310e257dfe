"""Raw metric record types and the entity label generators built on them."""

from typing import Any, Callable, Dict, List

from kubestats.core.exceptions import EntityLabelException

RawMetrics = Dict[str, Any]
RawGroups = Dict[str, Dict[str, RawMetrics]]
EntityIDGenerator = Callable[[str, str, RawGroups], str]

NODE_GROUP = "node"
POD_GROUP = "pod"
CONTAINER_GROUP = "container"
VOLUME_GROUP = "volume"


def new_raw_groups() -> RawGroups:
    """Empty groups for one collection cycle."""
    return {
        POD_GROUP: {},
        CONTAINER_GROUP: {},
        VOLUME_GROUP: {},
        NODE_GROUP: {},
    }


def from_raw_groups_entity_id_generator(key: str) -> EntityIDGenerator:
    """Entity ID taken verbatim from a string field of the raw record."""
    def generator(group_label: str, raw_entity_id: str, groups: RawGroups) -> str:
        record = groups.get(group_label, {}).get(raw_entity_id, {})
        if key not in record:
            raise EntityLabelException(f"{key!r} not found for {group_label!r}")
        
        value = record[key]
        if not isinstance(value, str):
            raise EntityLabelException(f"incorrect type of {key!r} for {group_label!r}")
        return value
    
    return generator


def from_raw_entity_id_group_entity_id_generator(key: str) -> EntityIDGenerator:
    """Entity ID built by stripping the ``{record[key]}_`` prefix off the raw entity ID.
    
    Pods are keyed ``{namespace}_{podName}``, so ``key="namespace"`` yields the pod name.
    """
    def generator(group_label: str, raw_entity_id: str, groups: RawGroups) -> str:
        record = groups.get(group_label, {}).get(raw_entity_id, {})
        if key not in record:
            raise EntityLabelException(f"{key!r} not found for {group_label!r}")
        
        prefix = f"{record[key]}_"
        value = raw_entity_id[len(prefix):] if raw_entity_id.startswith(prefix) else raw_entity_id
        if not value:
            raise EntityLabelException("generated entity ID is empty")
        return value
    
    return generator


def from_raw_groups_entity_type_generator(group_label: str,
                                          raw_entity_id: str,
                                          groups: RawGroups,
                                          cluster_name: str) -> str:
    """Build the entity type for a record.
    
    Namespaces and nodes are cluster scoped. Containers carry their namespace
    and pod name, every other group carries its namespace.
    """
    if group_label in ("namespace", NODE_GROUP):
        return f"k8s:{cluster_name}:{group_label}"
    
    if group_label == CONTAINER_GROUP:
        namespace, pod_name = _get_keys(group_label, raw_entity_id, groups, "namespace", "podName")
        if not namespace or not pod_name:
            raise EntityLabelException(f"empty values for generated entity type for {group_label!r}")
        return f"k8s:{cluster_name}:{namespace}:{pod_name}:{group_label}"
    
    namespace, = _get_keys(group_label, raw_entity_id, groups, "namespace")
    if not namespace:
        raise EntityLabelException(f"empty namespace for generated entity type for {group_label!r}")
    return f"k8s:{cluster_name}:{namespace}:{group_label}"


def from_label_get_namespace(metrics: RawMetrics) -> str:
    namespace = metrics.get("namespace")
    return namespace if isinstance(namespace, str) else ""


def _get_keys(group_label: str, raw_entity_id: str, groups: RawGroups, *keys: str) -> List[str]:
    if group_label not in groups:
        raise EntityLabelException(f"{group_label!r} not found")
    
    record = groups[group_label].get(raw_entity_id)
    if record is None:
        raise EntityLabelException(f"entity data {raw_entity_id!r} not found for {group_label!r}")
    
    values = []
    for key in keys:
        if key not in record:
            raise EntityLabelException(f"{key!r} not found for {group_label!r}")
        value = record[key]
        if not isinstance(value, str):
            raise EntityLabelException(f"incorrect type of {key!r} for {group_label!r}")
        values.append(value)
    
    return values
