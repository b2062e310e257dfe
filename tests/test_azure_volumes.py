"""
Unit tests for Azure volume identity and enrichment.
"""

from kubestats.metrics.azure_volumes import enrich_azure_volume_metrics, get_azure_volume_identifier
from builders import azure_disk_volume, azure_file_volume, empty_dir_volume, make_pod


class TestGetAzureVolumeIdentifier:
    """Identity derivation for Azure File and Azure Disk volumes."""

    def test_azure_file(self):
        pod = make_pod("test-pod", "default", [
            azure_file_volume("my-azure-file", secret_name="azure-secret", share_name="logs-share"),
        ])

        assert get_azure_volume_identifier("my-azure-file", pod) == "azurefile:default:azure-secret:logs-share"

    def test_azure_file_namespace_is_part_of_identity(self):
        volume = azure_file_volume("shared", secret_name="azure-secret", share_name="logs-share")
        pod_a = make_pod("pod-a", "team-a", [volume])
        pod_b = make_pod("pod-b", "team-b", [volume])

        id_a = get_azure_volume_identifier("shared", pod_a)
        id_b = get_azure_volume_identifier("shared", pod_b)

        assert id_a == "azurefile:team-a:azure-secret:logs-share"
        assert id_b == "azurefile:team-b:azure-secret:logs-share"
        assert id_a != id_b

    def test_azure_disk_with_name(self):
        pod = make_pod("test-pod", "default", [azure_disk_volume("disk", disk_name="my-disk-vol")])

        assert get_azure_volume_identifier("disk", pod) == "azuredisk:name:my-disk-vol"

    def test_azure_disk_with_uri_only(self):
        pod = make_pod("test-pod", "default", [
            azure_disk_volume("disk", disk_name="", disk_uri="/subscriptions/sub-id/disks/uri-disk"),
        ])

        assert get_azure_volume_identifier("disk", pod) == "azuredisk:uri:/subscriptions/sub-id/disks/uri-disk"

    def test_azure_disk_namespace_is_not_part_of_identity(self):
        volume = azure_disk_volume("disk", disk_name="shared-disk")

        assert (get_azure_volume_identifier("disk", make_pod("a", "ns-a", [volume]))
                == get_azure_volume_identifier("disk", make_pod("b", "ns-b", [volume])))

    def test_azure_disk_without_name_or_uri(self):
        pod = make_pod("test-pod", "default", [azure_disk_volume("disk", disk_name="", disk_uri="")])

        assert get_azure_volume_identifier("disk", pod) == ""

    def test_non_azure_volume(self):
        pod = make_pod("test-pod", "default", [empty_dir_volume("cache")])

        assert get_azure_volume_identifier("cache", pod) == ""

    def test_volume_not_found(self):
        pod = make_pod("test-pod", "default", [azure_file_volume("my-azure-file")])

        assert get_azure_volume_identifier("other", pod) == ""

    def test_missing_pod(self):
        assert get_azure_volume_identifier("any-volume", None) == ""


class TestEnrichAzureVolumeMetrics:
    """Metadata attached to retained Azure volume records."""

    def test_azure_file(self):
        pod = make_pod("test-pod", "default", [
            azure_file_volume("my-azure-file", secret_name="azure-secret", share_name="logs-share", read_only=True),
        ])
        metrics = {"volumeName": "my-azure-file"}

        enrich_azure_volume_metrics(metrics, "my-azure-file", pod)

        assert metrics == {
            "volumeName": "my-azure-file",
            "azureVolumeType": "azureFile",
            "azureShareName": "logs-share",
            "azureSecretName": "azure-secret",
            "azureReadOnly": True,
        }

    def test_azure_file_unset_read_only_reports_false(self):
        pod = make_pod("test-pod", "default", [azure_file_volume("f", read_only=None)])
        metrics = {}

        enrich_azure_volume_metrics(metrics, "f", pod)

        assert metrics["azureReadOnly"] is False

    def test_azure_disk(self):
        pod = make_pod("test-pod", "default", [
            azure_disk_volume(
                "my-azure-disk",
                disk_name="my-disk-vol",
                disk_uri="/subscriptions/sub-id/disks/my-disk-vol",
                fs_type="ext4",
                read_only=False,
            ),
        ])
        metrics = {}

        enrich_azure_volume_metrics(metrics, "my-azure-disk", pod)

        assert metrics["azureVolumeType"] == "azureDisk"
        assert metrics["azureDiskName"] == "my-disk-vol"
        assert metrics["azureDiskURI"] == "/subscriptions/sub-id/disks/my-disk-vol"
        assert metrics["azureFSType"] == "ext4"
        assert metrics["azureReadOnly"] is False

    def test_azure_disk_omits_unset_fields(self):
        pod = make_pod("test-pod", "default", [azure_disk_volume("d", disk_name="", disk_uri="/disks/d")])
        metrics = {}

        enrich_azure_volume_metrics(metrics, "d", pod)

        assert metrics == {"azureVolumeType": "azureDisk", "azureDiskURI": "/disks/d"}

    def test_idempotent(self):
        pod = make_pod("test-pod", "default", [azure_file_volume("f", share_name="s")])
        metrics = {"fsUsedBytes": 10}

        enrich_azure_volume_metrics(metrics, "f", pod)
        once = dict(metrics)
        enrich_azure_volume_metrics(metrics, "f", pod)

        assert metrics == once

    def test_non_azure_volume(self):
        pod = make_pod("test-pod", "default", [empty_dir_volume("emptydir-vol")])
        metrics = {}

        enrich_azure_volume_metrics(metrics, "emptydir-vol", pod)

        assert "azureVolumeType" not in metrics

    def test_missing_pod(self):
        metrics = {}

        enrich_azure_volume_metrics(metrics, "any-volume", None)

        assert metrics == {}
