from core.eventbus import emit, subscribe


def test_eventbus_handler_isolation():
    calls = []

    def bad(_):
        calls.append("bad")
        raise RuntimeError("boom")

    def good(payload):
        calls.append("good")
        payload["mutated"] = True

    def observer(payload):
        calls.append("mutated" in payload)

    subscribe("IsoEvent", bad)
    subscribe("IsoEvent", good)
    subscribe("IsoEvent", observer)
    emit("IsoEvent", {})
    assert calls == ["bad", "good", False]
