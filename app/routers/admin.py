# app/routers/admin.py

import secrets

from fastapi import APIRouter, Request

from app.core import config
from app.core.errors import PromoError, Unauthorized
from app.core.logging import get_logger
from app.models.claim import ClaimList
from app.routers.responses import json_response, preflight_response, read_json_object

router = APIRouter()
logger = get_logger("promo_drop.routers.admin")

METHODS = "POST, OPTIONS"
ACTIONS = ("load_codes", "status", "claims", "reconcile")


def check_admin_secret(received) -> None:
    """Raise Unauthorized unless ``received`` matches ADMIN_SECRET (unset means disabled)."""
    expected = config.ADMIN_SECRET
    if not expected or not isinstance(received, str) or not received:
        raise Unauthorized()
    if not secrets.compare_digest(expected.encode("utf-8"), received.encode("utf-8")):
        raise Unauthorized()


async def _load_codes(allocator, data: dict) -> dict:
    status = await allocator.load_codes(data.get("codes"), reset_claims=bool(data.get("reset")))
    return {
        "success": True,
        "totalCodes": status.total,
        "claimedSoFar": status.claimed,
        "remaining": status.remaining,
    }


async def _status(allocator, data: dict) -> dict:
    status = await allocator.codes.get_status()
    return {"totalCodes": status.total, "claimed": status.claimed, "remaining": status.remaining}


async def _claims(allocator, data: dict) -> dict:
    claims = await allocator.claims.list_claims()
    return ClaimList(total_claims=len(claims), claims=claims).model_dump(mode="json", by_alias=True)


async def _reconcile(allocator, data: dict) -> dict:
    return {"claimed": await allocator.reconcile_claimed_count()}


HANDLERS = {
    "load_codes": _load_codes,
    "status": _status,
    "claims": _claims,
    "reconcile": _reconcile,
}


@router.post("/admin")
async def admin(request: Request):
    try:
        data = await read_json_object(request, "Invalid JSON")
        check_admin_secret(data.get("secret"))
        action = data.get("action")
        handler = HANDLERS.get(action) if isinstance(action, str) else None
        if handler is None:
            return json_response(
                {"error": f"Unknown action. Use: {', '.join(ACTIONS)}"}, METHODS, status_code=400
            )
        payload = await handler(request.app.state.allocator, data)
    except PromoError as e:
        logger.warning("admin.rejected", status_code=e.status_code, reason=e.message)
        return json_response({"error": e.message}, METHODS, status_code=e.status_code)
    except Exception:
        logger.exception("admin.failed")
        return json_response({"error": "Internal error"}, METHODS, status_code=500)

    logger.info("admin.action", action=action)
    return json_response(payload, METHODS)


@router.options("/admin")
async def admin_preflight():
    return preflight_response(METHODS)
