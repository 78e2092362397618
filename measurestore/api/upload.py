from __future__ import annotations

from fastapi import Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from ..core.errors import DecodeError, ReadError


UPLOAD_FIELD = "data"


async def read_upload(request: Request, field: str = UPLOAD_FIELD) -> bytes:
    """Return the full content of the multipart file field ``field``."""
    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        raise DecodeError("request Content-Type isn't multipart/form-data")

    try:
        form = await request.form()
    except MultiPartException as exc:
        raise DecodeError(exc.message) from exc
    except StarletteHTTPException as exc:
        # newer Starlette reports malformed bodies as a 400 HTTPException
        raise DecodeError(str(exc.detail)) from exc

    try:
        upload = form.get(field)
        if not isinstance(upload, UploadFile):
            raise DecodeError("http: no such file")
        try:
            return await upload.read()
        except OSError as exc:
            raise ReadError(str(exc)) from exc
    finally:
        await form.close()
