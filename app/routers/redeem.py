# app/routers/redeem.py

from fastapi import APIRouter, Request

from app.core.errors import InvalidInput
from app.core.logging import get_logger
from app.routers.responses import json_response, preflight_response, read_json_object

router = APIRouter()
logger = get_logger("promo_drop.routers.redeem")

METHODS = "POST, GET, OPTIONS"


@router.get("/redeem")
async def redeem_status(request: Request):
    """Remaining count for the public page."""
    try:
        status = await request.app.state.allocator.codes.get_status()
    except Exception:
        logger.exception("redeem.status_failed")
        return json_response({"error": "Internal error"}, METHODS, status_code=500)
    return json_response(status.model_dump(), METHODS)


@router.post("/redeem")
async def redeem(request: Request):
    try:
        data = await read_json_object(request, "Invalid JSON body")
        result = await request.app.state.allocator.redeem(data.get("name"), data.get("email"))
    except InvalidInput as e:
        logger.info("redeem.rejected", reason=e.message)
        return json_response({"error": e.message}, METHODS, status_code=400)
    except Exception:
        logger.exception("redeem.failed")
        return json_response({"error": "Internal error"}, METHODS, status_code=500)
    return json_response(result.model_dump(exclude_none=True), METHODS)


@router.options("/redeem")
async def redeem_preflight():
    return preflight_response(METHODS)
