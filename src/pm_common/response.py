"""Error envelope for non-5xx failures.

Data endpoints return bare JSON (arrays / strings) on success and an empty
body on 5xx. Client errors (401) use this shape:
{
    "code": 1001,
    "message": "Missing or invalid credentials",
    "timestamp": "...",
    "request_id": "..."
}
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    code: int
    message: str
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


def error_response(code: int, message: str, request_id: str | None = None) -> ErrorResponse:
    resp = ErrorResponse(code=code, message=message)
    if request_id:
        resp.request_id = request_id
    return resp
