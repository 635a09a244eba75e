"""Data transfer objects decoded from provider responses."""

from .over_limit import OverLimitBody, OverLimitFault, parse_over_limit

__all__ = ["OverLimitBody", "OverLimitFault", "parse_over_limit"]
