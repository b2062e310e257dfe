"""
Shared pytest fixtures for all tests.

Provides filter configurations and kubelet summary payloads.
"""

import pytest

from kubestats.config.settings import VolumeFilterSettings
from kubestats.metrics.grouping import log_config_gate


@pytest.fixture(autouse=True)
def reset_log_config_gate():
    """Each test starts as the first cycle of the process."""
    log_config_gate.reset()
    yield
    log_config_gate.reset()


@pytest.fixture
def filter_all_config():
    return VolumeFilterSettings(
        filter_service_account_volumes=True,
        filter_secret_volumes=True,
        filter_configmap_volumes=True,
        deduplicate_azure_volumes=False,
    )


@pytest.fixture
def dedupe_config():
    return VolumeFilterSettings(deduplicate_azure_volumes=True)


@pytest.fixture
def full_summary_payload():
    """Kubelet /stats/summary payload covering every extracted field."""
    return {
        "node": {
            "nodeName": "aks-nodepool1-0",
            "cpu": {"usageNanoCores": 150000000, "usageCoreNanoSeconds": 9000000000},
            "memory": {
                "availableBytes": 4000,
                "usageBytes": 6000,
                "workingSetBytes": 5000,
                "rssBytes": 3000,
                "pageFaults": 10,
                "majorPageFaults": 0,
            },
            "network": {
                "name": "eth0",
                "rxBytes": 100,
                "rxErrors": 1,
                "txBytes": 200,
                "txErrors": 2,
                "interfaces": [
                    {"name": "eth0", "rxBytes": 100, "rxErrors": 1, "txBytes": 200, "txErrors": 2},
                    {"name": "cni0", "rxBytes": 50, "txBytes": 60},
                ],
            },
            "fs": {
                "availableBytes": 1, "capacityBytes": 2, "usedBytes": 3,
                "inodesFree": 4, "inodes": 5, "inodesUsed": 6,
            },
            "runtime": {
                "imageFs": {
                    "availableBytes": 11, "capacityBytes": 12, "usedBytes": 13,
                    "inodesFree": 14, "inodes": 15, "inodesUsed": 16,
                }
            },
        },
        "pods": [
            {
                "podRef": {"name": "web-0", "namespace": "shop", "uid": "abc"},
                "network": {"name": "eth0", "rxBytes": 10, "txBytes": 20, "rxErrors": 0, "txErrors": 0},
                "volume": [
                    {"name": "data", "availableBytes": 100, "capacityBytes": 200, "usedBytes": 100,
                     "inodesFree": 9, "inodes": 10, "inodesUsed": 1,
                     "pvcRef": {"name": "data-web-0", "namespace": "shop"}},
                    {"name": "kube-api-access-x1y2z", "availableBytes": 1, "capacityBytes": 2},
                ],
                "containers": [
                    {"name": "web",
                     "cpu": {"usageNanoCores": 42},
                     "memory": {"usageBytes": 700, "workingSetBytes": 600},
                     "rootfs": {"availableBytes": 7, "capacityBytes": 8, "usedBytes": 1}},
                ],
            }
        ],
    }
