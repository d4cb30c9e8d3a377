from core import metrics
from core.events import on, reset_listeners_for_tests
from core.notify import (
    EventBusSink,
    FanOutSink,
    MemorySink,
    build_all_up_to_date_message,
    build_api_key_required_message,
)


def test_memory_sink_visibility_and_bound():
    sink = MemorySink(maxlen=2)
    sink.post(build_all_up_to_date_message(), [])
    sink.post(build_api_key_required_message(), ["gm"])
    sink.post(build_api_key_required_message(), ["other"])
    assert len(sink.messages()) == 2
    assert [m.whisper for m in sink.messages("gm")] == [["gm"]]
    sink.clear()
    assert sink.messages() == []


def test_event_bus_sink_publishes_chat_message():
    reset_listeners_for_tests()
    metrics.reset_for_tests()
    seen = []
    on(lambda n, p: seen.append((n, p)))
    EventBusSink().post(build_api_key_required_message(), ["gm"])
    name, payload = seen[-1]
    assert name == "ChatMessagePosted"
    assert payload["whisper"] == ["gm"]
    assert payload["content"]["kind"] == "api-key-required"
    assert (
        metrics.snapshot()["counters"][
            "notifications_posted_total{kind=api-key-required}"
        ]
        == 1
    )
    reset_listeners_for_tests()


def test_fan_out_isolates_failing_sink():
    class Broken:
        def post(self, message, whisper=()):
            raise RuntimeError("down")

    good = MemorySink()
    FanOutSink(Broken(), good).post(build_all_up_to_date_message())
    assert len(good.messages()) == 1
