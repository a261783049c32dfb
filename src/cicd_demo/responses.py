"""Typed HTTP responses produced by the router."""
from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any


class ContentType(str, enum.Enum):
    HTML = "text/html"
    JSON = "application/json"


@dataclass(frozen=True)
class Response:
    status: int
    content_type: ContentType
    body: str

    @property
    def header_value(self) -> str:
        return f"{self.content_type.value}; charset=utf-8"

    def encode(self) -> bytes:
        return self.body.encode("utf-8")


def json_response(payload: dict[str, Any], status: int = 200) -> Response:
    return Response(status, ContentType.JSON, json.dumps(payload, ensure_ascii=False))


def html_response(body: str, status: int = 200) -> Response:
    return Response(status, ContentType.HTML, body)
