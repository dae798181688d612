"""
JetSet Backend - Shared route helpers
"""

from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from app.models import ApiResponse


def error_response(status_code: int, message: str, error: Optional[str] = None, data: Any = None) -> JSONResponse:
    """Envelope with success=false and a non-2xx status."""
    body = ApiResponse(success=False, message=message, error=error, data=data)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))


async def request_params(request: Request) -> Dict[str, Any]:
    """Query parameters overlaid with a JSON body, if one was sent."""
    params: Dict[str, Any] = dict(request.query_params)
    if request.method in ("POST", "PUT"):
        try:
            body = await request.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            params.update(body)
    return params
