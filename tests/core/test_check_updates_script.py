import json

import httpx

from scripts.check_updates import main


def _modules(tmp_path):
    for mid, version in (("foo", "v1.2.0"), ("bar", "1.0.0")):
        d = tmp_path / mid
        d.mkdir()
        (d / "module.json").write_text(
            json.dumps({"id": mid, "title": mid.title(), "version": version}),
            encoding="utf-8",
        )
    return tmp_path


def _transport(body, calls):
    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=body)

    return httpx.MockTransport(handler)


def test_cli_reports_updates_as_json(
    tmp_path, capsys, monkeypatch, make_registry_response
):
    monkeypatch.setenv("MON_CONFIG_DIR", str(tmp_path / "cfg"))
    calls = []
    body = make_registry_response(("foo", "1.3.0"), ("bar", "1.0.0"))
    code = main(
        ["--modules-dir", str(_modules(tmp_path)), "--api-key", "k", "--json"],
        transport=_transport(body, calls),
    )
    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["ok"] is True
    assert [(u["id"], u["current"], u["latest"]) for u in out["updates"]] == [
        ("foo", "1.2.0", "1.3.0")
    ]
    assert len(calls) == 1


def test_cli_inactive_modules_and_missing_key(
    tmp_path, capsys, monkeypatch, make_registry_response
):
    monkeypatch.setenv("MON_CONFIG_DIR", str(tmp_path / "cfg"))
    monkeypatch.delenv("MON_API_KEY", raising=False)
    calls = []
    code = main(
        ["--modules-dir", str(_modules(tmp_path)), "--active", "bar"],
        transport=_transport(make_registry_response(("foo", "9.0")), calls),
    )
    assert code == 1
    assert calls == []
    captured = capsys.readouterr()
    assert "API key is required" in captured.out
    assert "Check failed" in captured.err
