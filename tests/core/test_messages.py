from core.notify import (
    build_all_up_to_date_message,
    build_api_key_required_message,
    build_updates_message,
    render_text,
)
from core.notify.messages import ALL_UP_TO_DATE_TEXT, UPDATES_TITLE
from core.updates import UpdateRecord


def _records():
    return [
        UpdateRecord("foo", "Foo", "1.2.0", "1.3.0", release_notes="https://n/foo"),
        UpdateRecord("bar", "Bar", "0.1", "0.2"),
    ]


def test_updates_message_lists_every_record_in_order():
    msg = build_updates_message(_records())
    assert msg.kind == "updates-available"
    assert msg.title == UPDATES_TITLE
    assert [i.title for i in msg.items] == ["Foo", "Bar"]
    assert msg.items[1].notes_url is None
    assert msg.to_dict()["items"][0]["latest"] == "1.3.0"


def test_render_text_includes_notes_link_only_when_known():
    text = render_text(build_updates_message(_records())).splitlines()
    assert text[0] == UPDATES_TITLE
    assert text[1] == "- Foo: 1.2.0 -> 1.3.0 (Release Notes: https://n/foo)"
    assert text[2] == "- Bar: 0.1 -> 0.2"


def test_api_key_message_links_instructions():
    msg = build_api_key_required_message("https://readme")
    assert msg.channel == "chat"
    assert msg.link == "https://readme"
    assert "API key" in msg.body


def test_all_up_to_date_is_toast():
    msg = build_all_up_to_date_message()
    assert msg.channel == "toast"
    assert render_text(msg).endswith(ALL_UP_TO_DATE_TEXT)
