# config/settings.py
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from enum import Enum
from dotenv import load_dotenv

# Load .env file explicitly
load_dotenv()

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


class VolumeFilterSettings(BaseSettings):
    """Volume filtering and deduplication switches applied while grouping."""
    
    model_config = SettingsConfigDict(env_prefix="KUBELET_")
    
    filter_service_account_volumes: bool = Field(
        True, description="Filter projected volumes carrying a service account token"
    )
    filter_secret_volumes: bool = Field(False, description="Filter Secret-sourced volumes")
    filter_configmap_volumes: bool = Field(
        False, description="Filter ConfigMap-sourced volumes, direct or projected"
    )
    deduplicate_azure_volumes: bool = Field(
        False, description="Report each Azure File share or Azure Disk once per cycle"
    )


class KubernetesSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="K8S_")
    
    kubeconfig_path: Optional[str] = Field(None, description="Path to kubeconfig file")
    context: Optional[str] = Field(None, description="Kubernetes context to use")
    cluster_name: str = Field("unknown", description="Cluster name used in entity types")
    node_name: Optional[str] = Field(None, description="Node whose kubelet is scraped")
    request_timeout_seconds: int = Field(30, description="Timeout for API server requests")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    debug: bool = Field(False, description="Debug mode")
    log_level: LogLevel = Field(LogLevel.INFO, description="Log level")
    log_format: LogFormat = Field(LogFormat.TEXT, description="Log format (json or text)")
    log_config_path: Optional[str] = Field(None, description="YAML logging dictConfig file")
    
    kubelet: VolumeFilterSettings = Field(default_factory=lambda: VolumeFilterSettings())
    kubernetes: KubernetesSettings = Field(default_factory=lambda: KubernetesSettings())

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @field_validator('log_format', mode='before')
    @classmethod
    def validate_log_format(cls, v):
        if isinstance(v, str):
            return LogFormat(v.lower())
        return v

    @classmethod
    def create_from_env(cls) -> "Settings":
        """Create settings instance from environment variables."""
        return cls()
