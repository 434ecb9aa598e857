"""
Platform Configuration.

Settings for the GCE metadata server and the downward-API variables that
identify the running pod.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MetadataSettings(BaseSettings):
    """
    GCE metadata server settings.
    Prefix: GCE_METADATA_ (same variables the Google client libraries honour)
    """

    model_config = SettingsConfigDict(
        env_prefix="GCE_METADATA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    host: Optional[str] = Field(
        default=None,
        description="Metadata host override (host[:port]); when set the process is treated as running on GCE",
    )
    ip: str = Field(default="169.254.169.254", description="Metadata server address used by the presence probe")
    timeout: float = Field(default=2.0, description="Timeout in seconds for metadata requests")


class PodSettings(BaseSettings):
    """
    Pod identity injected through the Kubernetes downward API.
    Prefix: POD_
    """

    model_config = SettingsConfigDict(
        env_prefix="POD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    namespace: str = Field(default="", description="Namespace of the pod (POD_NAMESPACE)")
    name: str = Field(default="", description="Name of the pod (POD_NAME)")
