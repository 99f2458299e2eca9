from typing import Any, List, Optional
from fastapi.responses import JSONResponse
from fastapi import status
from pydantic import BaseModel

from .schemas.response import APIResponse, ErrorDetail

def create_response(body: Any, status_code: int = status.HTTP_200_OK, headers=None):
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json", by_alias=True)
    return JSONResponse(
        content=body,
        status_code=status_code,
        headers=headers
    )

def success_response(results: Any, status_code: int = status.HTTP_200_OK, headers=None):
    if isinstance(results, BaseModel):
        results = results.model_dump(mode="json", by_alias=True)
    return create_response(
        body=APIResponse.success(results),
        status_code=status_code,
        headers=headers
    )

def error_response(status_code: int, message: str, field: str = "", errors: Optional[List[ErrorDetail]] = None, headers=None):
    return create_response(
        body=APIResponse.failure(errors or [ErrorDetail(field=field, message=message)]),
        status_code=status_code,
        headers=headers
    )
