"""Open Build Service API client."""

from obscli.obs.client import OBSClient

__all__ = ["OBSClient"]
