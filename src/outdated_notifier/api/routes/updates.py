"""/updates, /modules, /messages routes."""
from __future__ import annotations

from fastapi import APIRouter, Request

from core.notify.decorate import ModuleRow, decorate_module_rows
from outdated_notifier.api.runtime import Runtime

router = APIRouter()


def _runtime(request: Request) -> Runtime:
    return request.app.state.runtime


@router.get("/updates")
def list_updates(request: Request):  # noqa: D401
    rt = _runtime(request)
    return {
        "checked_at": rt.store.checked_at,
        "updates": [r.to_dict() for r in rt.store.latest()],
    }


@router.post("/updates/check")
async def run_check(request: Request):  # noqa: D401
    rt = _runtime(request)
    updates = await rt.notifier.check_and_notify()
    if updates is None:
        err = rt.checker.last_error
        return {
            "ok": False,
            "error_type": getattr(err, "error_type", None),
            "updates": [r.to_dict() for r in rt.store.latest()],
        }
    return {"ok": True, "updates": [r.to_dict() for r in updates]}


@router.get("/modules")
def list_modules(request: Request):  # noqa: D401
    """Installed modules as rows decorated with update markers."""
    rt = _runtime(request)
    modules = list(rt.modules.list_modules())
    rows = [ModuleRow(module_id=m.id) for m in modules]
    records = rt.store.latest()
    decorate_module_rows(rows, records)
    out = []
    for mod, row in zip(modules, rows):
        rec = rt.store.get(mod.id)
        out.append(
            {
                "id": mod.id,
                "title": mod.title,
                "version": mod.version,
                "active": mod.active,
                "row": row.to_dict(),
                "update": rec.to_dict() if rec else None,
            }
        )
    return {"modules": out}


@router.get("/messages")
def list_messages(request: Request, user_id: str | None = None):  # noqa: D401
    rt = _runtime(request)
    return {
        "messages": [
            {
                "ts": pm.ts,
                "whisper": pm.whisper,
                **pm.message.to_dict(),
            }
            for pm in rt.messages.messages(user_id)
        ]
    }
