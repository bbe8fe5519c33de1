"""Shared FastAPI dependencies: settings, the outbound HTTP client, body parsing."""
from typing import Annotated, Any, AsyncGenerator, TypeVar

import httpx
from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from app.core.config import Settings, get_settings

SchemaT = TypeVar("SchemaT", bound=BaseModel)


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Outbound client for Google and OpenAI. No timeout or retry is applied."""
    async with httpx.AsyncClient(timeout=None) as client:
        yield client


async def read_json_object(request: Request) -> dict[str, Any]:
    """Decode the request body as a JSON object.

    Protected routes call this after the caller is resolved, so an anonymous
    request is answered 401 before its body is ever looked at. Failures raise
    RequestValidationError and render as the usual 400.
    """
    try:
        data = await request.json()
    except ValueError:
        raise RequestValidationError(
            [{"loc": ("body",), "msg": "JSON decode error", "type": "json_invalid"}]
        )
    if not isinstance(data, dict):
        raise RequestValidationError(
            [{"loc": ("body",), "msg": "Input should be a JSON object", "type": "dict_type"}]
        )
    return data


async def parse_body(request: Request, schema: type[SchemaT]) -> SchemaT:
    data = await read_json_object(request)
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


SettingsDep = Annotated[Settings, Depends(get_settings)]
HttpClient = Annotated[httpx.AsyncClient, Depends(get_http_client)]
