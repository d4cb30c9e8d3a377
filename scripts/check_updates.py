"""One-shot update check from the command line.

Reads installed modules from a directory of `*/module.json` manifests, runs a
single check against the registry and prints the resulting message.

Usage (one line):
    python scripts/check_updates.py --modules-dir data/modules --active foo bar
Key from `--api-key` or MON_API_KEY; exit code 0 = checked, 1 = failed.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
for _p in (ROOT, SRC):
    if _p not in sys.path:  # pragma: no cover
        sys.path.insert(0, _p)

from core.config import get_config  # noqa: E402
from core.modules import DirectoryModuleProvider, load_installed_modules  # noqa: E402
from core.notify import render_text  # noqa: E402
from core.settings import SettingsStore  # noqa: E402
from outdated_notifier.api.runtime import build_runtime  # noqa: E402


def _parse(argv: Optional[List[str]]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Check installed modules for updates")
    ap.add_argument("--modules-dir", required=True, dest="modules_dir")
    ap.add_argument(
        "--active",
        nargs="*",
        default=None,
        help="active module ids (default: every installed module)",
    )
    ap.add_argument("--api-key", default=os.getenv("MON_API_KEY", ""), dest="api_key")
    ap.add_argument("--json", action="store_true", dest="as_json")
    ap.add_argument("--config_dir", default=None)
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None, transport=None) -> int:  # noqa: D401
    args = _parse(argv)
    if args.config_dir:
        os.environ["MON_CONFIG_DIR"] = args.config_dir
    active = args.active
    if active is None:
        active = [m.id for m in load_installed_modules(args.modules_dir)]

    settings = SettingsStore()
    settings.set_api_key(args.api_key)
    rt = build_runtime(
        config=get_config(),
        modules=DirectoryModuleProvider(args.modules_dir, active),
        transport=transport,
        settings=settings,
    )
    updates = asyncio.run(rt.notifier.check_and_notify())

    if args.as_json:
        out = {
            "ok": updates is not None,
            "error_type": getattr(rt.checker.last_error, "error_type", None),
            "updates": [u.to_dict() for u in updates or []],
        }
        print(json.dumps(out, ensure_ascii=False, indent=2))
    else:
        for posted in rt.messages.messages():
            print(render_text(posted.message))
        if updates is None and rt.checker.last_error is not None:
            print(f"Check failed: {rt.checker.last_error}", file=sys.stderr)
    return 0 if updates is not None else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
