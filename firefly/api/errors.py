# File: firefly/api/errors.py

"""
Errors for the document routes.

These answer with ``{"message": ..., "error": ...}`` rather than FastAPI's
``{"detail": ...}`` because the report editor reads ``message``.
"""

from typing import Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse


class DocumentAPIError(Exception):
    def __init__(
        self,
        status_code: int,
        message: str,
        error: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error
        self.headers = headers

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.error:
            body["error"] = self.error
        return body


async def document_api_error_handler(request: Request, exc: DocumentAPIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)
