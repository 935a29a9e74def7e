# app/routers/responses.py

import json

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from app.core.errors import InvalidInput

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
}


def cors_headers(methods: str) -> dict:
    return {**CORS_HEADERS, "Access-Control-Allow-Methods": methods}


def json_response(data, methods: str, status_code: int = 200) -> JSONResponse:
    return JSONResponse(data, status_code=status_code, headers=cors_headers(methods))


def preflight_response(methods: str) -> Response:
    return Response(status_code=204, headers=cors_headers(methods))


async def read_json_object(request: Request, error: str) -> dict:
    """Parse the request body as a JSON object or raise InvalidInput."""
    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InvalidInput(error)
    if not isinstance(data, dict):
        raise InvalidInput(error)
    return data
