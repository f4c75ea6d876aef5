"""
Request body helpers.

Location and config endpoints accept JSON or form bodies (multipart when an
image file is attached). The body is parsed once per request and cached on
request.state, since identity resolution also reads it.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from providers.base import ImagePayload
from shared.exceptions import ValidationError

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")
IMAGE_FIELD = "image"

M = TypeVar("M", bound=BaseModel)


@dataclass
class RequestBody:
    """Parsed request body: plain fields plus an optional uploaded image file."""

    fields: dict[str, Any] = field(default_factory=dict)
    file: Optional[UploadFile] = None


async def read_request_body(request: Request) -> RequestBody:
    """
    Parse the request body as JSON or form data.

    Raises:
        ValidationError: If a JSON body is malformed or not an object
    """
    cached = getattr(request.state, "parsed_body", None)
    if cached is not None:
        return cached

    body = RequestBody()
    if request.method in BODY_METHODS:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            for name, value in form.multi_items():
                if isinstance(value, UploadFile):
                    if name == IMAGE_FIELD and value.filename:
                        body.file = value
                else:
                    body.fields[name] = value
        else:
            raw = await request.body()
            if raw.strip():
                try:
                    parsed = json.loads(raw)
                except json.JSONDecodeError:
                    raise ValidationError("Malformed JSON body")
                if not isinstance(parsed, dict):
                    raise ValidationError("Request body must be a JSON object")
                body.fields = parsed

    request.state.parsed_body = body
    return body


def parse_payload(model: type[M], data: dict[str, Any]) -> M:
    """
    Validate `data` against a request model.

    Raises:
        ValidationError: With pydantic's field-level errors in details["errors"]
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        raise ValidationError("Invalid request body", details={"errors": errors})


async def read_image_upload(file: Optional[UploadFile], max_bytes: int) -> Optional[ImagePayload]:
    """
    Read an uploaded image file into memory.

    Raises:
        ValidationError: If the file is not an image or exceeds max_bytes
    """
    if file is None:
        return None
    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise ValidationError("Only image files are allowed", details={"field": IMAGE_FIELD})
    data = await file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise ValidationError(
            f"Image exceeds the {max_bytes // (1024 * 1024)}MB limit",
            details={"field": IMAGE_FIELD},
        )
    if not data:
        return None
    return ImagePayload(data=data, filename=file.filename or "image", content_type=content_type)
