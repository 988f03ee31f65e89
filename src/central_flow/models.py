"""Shared pydantic base and the result DTO handed to the shell layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class _StrictModel(BaseModel):
    """Shared strict model settings for launcher contracts."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


def _normalize_string_list(values: list[str]) -> list[str]:
    """Trim whitespace and drop empty entries while preserving order."""
    normalized: list[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        cleaned = value.strip()
        if cleaned:
            normalized.append(cleaned)
    return normalized


class ResultSummary(_StrictModel):
    """What the shell layer sees of a ranked result.

    The bound action and the producing provider stay inside the core;
    ``icon`` is a ready-to-render data URI when present.
    """

    id: str
    title: str
    icon: str | None = None

    @field_validator("id")
    @classmethod
    def require_id(cls, value: str) -> str:
        if not value:
            raise ValueError("result id must not be empty")
        return value
