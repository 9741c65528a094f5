"""Typed shapes of the response envelope and linked results."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

NOT_FOUND_MESSAGE = "Resource not found"


class LcmapModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ResponseEnvelope(LcmapModel):
    result: Any = None
    errors: list[str] = Field(default_factory=list)


class NotFoundEnvelope(ResponseEnvelope):
    status: int | None = None
    errors: list[str] = Field(default_factory=lambda: [NOT_FOUND_MESSAGE])
    headers: Mapping[str, str] = Field(default_factory=dict)


class Link(LcmapModel):
    href: str


class LinkedPayload(LcmapModel):
    link: Link


class LinkedResult(LcmapModel):
    result: LinkedPayload
