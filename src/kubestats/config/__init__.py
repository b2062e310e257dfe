from .settings import Settings, VolumeFilterSettings, KubernetesSettings, LogLevel, LogFormat

__all__ = [
    "Settings",
    "VolumeFilterSettings",
    "KubernetesSettings",
    "LogLevel",
    "LogFormat",
]
