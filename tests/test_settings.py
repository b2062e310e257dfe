"""
Unit tests for settings loaded from the environment.
"""

import pytest

from kubestats.config.settings import LogFormat, LogLevel, Settings, VolumeFilterSettings
from builders import FILTER_ENV


@pytest.fixture
def clean_env(monkeypatch):
    for name in FILTER_ENV + ["LOG_LEVEL", "LOG_FORMAT"]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_filter_defaults(clean_env):
    config = VolumeFilterSettings()

    assert config.filter_service_account_volumes is True
    assert config.filter_secret_volumes is False
    assert config.filter_configmap_volumes is False
    assert config.deduplicate_azure_volumes is False


def test_filter_switches_from_env(clean_env):
    clean_env.setenv("KUBELET_FILTER_SECRET_VOLUMES", "true")
    clean_env.setenv("KUBELET_DEDUPLICATE_AZURE_VOLUMES", "1")
    clean_env.setenv("KUBELET_FILTER_SERVICE_ACCOUNT_VOLUMES", "false")

    config = Settings.create_from_env().kubelet

    assert config.filter_secret_volumes is True
    assert config.deduplicate_azure_volumes is True
    assert config.filter_service_account_volumes is False


def test_log_settings_are_normalised(clean_env):
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("LOG_FORMAT", "JSON")

    settings = Settings.create_from_env()

    assert settings.log_level == LogLevel.DEBUG
    assert settings.log_format == LogFormat.JSON
