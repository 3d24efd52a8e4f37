"""HTTP resource server."""
from src.server.lifecycle import ListenResult, ResourceServer

__all__ = ["ListenResult", "ResourceServer"]
