"""Platform discovery (GCE metadata server)."""

from .metadata import MetadataClient

__all__ = ["MetadataClient"]
