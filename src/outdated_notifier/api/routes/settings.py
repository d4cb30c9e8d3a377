"""/settings routes: API key management (value never echoed back)."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from core.settings import LicenseFileError, MODULE_ID, extract_api_key
from outdated_notifier.api.runtime import Runtime

router = APIRouter()


class ApiKeyRequest(BaseModel):  # noqa: D401
    api_key: str


class LicenseFileRequest(BaseModel):  # noqa: D401
    filename: str
    contents: str


def _runtime(request: Request) -> Runtime:
    return request.app.state.runtime


async def _store_key(rt: Runtime, api_key: str) -> dict:
    rt.pending = None
    changed = rt.settings.set_api_key(api_key)
    result: dict = {"changed": changed, "api_key_set": bool(rt.settings.get_api_key())}
    if changed and rt.pending is not None:
        updates = await rt.pending
        result["check"] = {
            "ok": updates is not None,
            "updates": len(updates) if updates is not None else None,
        }
    return result


@router.get("/settings")
def get_settings(request: Request):  # noqa: D401
    rt = _runtime(request)
    return {
        "module_id": MODULE_ID,
        "api_key_set": bool(rt.settings.get_api_key()),
    }


@router.put("/settings/api-key")
async def put_api_key(payload: ApiKeyRequest, request: Request):  # noqa: D401
    return await _store_key(_runtime(request), payload.api_key)


@router.post("/settings/license-file")
async def post_license_file(
    payload: LicenseFileRequest, request: Request
):  # noqa: D401
    try:
        api_key = extract_api_key(payload.filename, payload.contents)
    except LicenseFileError as e:
        raise HTTPException(
            status_code=422,
            detail={"error_type": e.error_type, "message": str(e)},
        ) from e
    return await _store_key(_runtime(request), api_key)
