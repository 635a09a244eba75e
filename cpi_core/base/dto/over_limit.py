"""Typed view of a provider "over limit" error body.

Purpose
-------
Rate-limited OpenStack-style APIs answer with a JSON document such as::

    {"overLimit": {"code": 413, "message": "...", "retryAfter": "5"}}

(older deployments use ``overLimitFault`` as the top-level key). This module
decodes that body into a small DTO so the retry executor can read the
server-suggested wait without poking at raw dictionaries.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for JSON decoding and validation.

Failure modes
-------------
- ``parse_over_limit`` never raises: malformed JSON, a non-object document or
  a body without an over-limit member all yield ``None`` ("no retry hint").
- An unparseable or non-finite ``retryAfter`` (an HTTP date, ``"Infinity"``,
  ``NaN``) is kept as ``None`` so callers fall back to their default
  interval.
"""
from __future__ import annotations

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class OverLimitFault(BaseModel):
    """Inner over-limit member of the error body."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    code: Optional[int] = None
    message: Any = None
    retry_after: Optional[int] = Field(default=None, alias="retryAfter")

    @field_validator("code", mode="before")
    @classmethod
    def _lenient_code(cls, value: Any) -> Optional[int]:
        return _to_seconds(value)

    @field_validator("retry_after", mode="before")
    @classmethod
    def _coerce_retry_after(cls, value: Any) -> Optional[int]:
        return _to_seconds(value)

    def wait_seconds(self, default: float) -> float:
        """Return the hinted wait, or ``default`` when the hint is absent."""
        return float(self.retry_after) if self.retry_after is not None else float(default)


class OverLimitBody(BaseModel):
    """Top-level error document; at most one of the members is usually set."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    over_limit: Optional[OverLimitFault] = Field(default=None, alias="overLimit")
    over_limit_fault: Optional[OverLimitFault] = Field(default=None, alias="overLimitFault")

    @property
    def fault(self) -> Optional[OverLimitFault]:
        return self.over_limit or self.over_limit_fault


def _to_seconds(value: Any) -> Optional[int]:
    """Coerce ints, finite floats and numeric strings to whole, non-negative seconds."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, str)):
        try:
            value = float(value.strip() if isinstance(value, str) else value)
        except (ValueError, OverflowError):
            return None
    if isinstance(value, float):
        # "inf", "nan" and overflowing literals such as 1e999 carry no usable wait.
        if not math.isfinite(value):
            return None
        return max(0, int(value))
    return None


def parse_over_limit(body: str | bytes | None) -> Optional[OverLimitFault]:
    """Decode ``body`` and return its over-limit member, or ``None``."""
    if not body:
        return None
    try:
        parsed = OverLimitBody.model_validate_json(body)
    except ValidationError:
        return None
    return parsed.fault


__all__ = ["OverLimitBody", "OverLimitFault", "parse_over_limit"]
