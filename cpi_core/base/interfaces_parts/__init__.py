"""Interfaces (Protocols) split into single-class modules."""

from .resource_handle import AsyncResourceHandle, ResourceHandle

__all__ = ["AsyncResourceHandle", "ResourceHandle"]
