"""Stable import path for the core's structural interfaces."""

from .interfaces_parts import AsyncResourceHandle, ResourceHandle

__all__ = ["AsyncResourceHandle", "ResourceHandle"]
