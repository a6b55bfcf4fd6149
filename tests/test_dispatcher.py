import pytest

from conftest import FakeClient, envelope, text_event
from lambdas.line_webhook.dispatcher import UNSUPPORTED_MESSAGE_TEXT, handle
from lambdas.line_webhook.errors import LineApiError, MalformedBody, ReplyFailure


def test_echo(client):
    handle(envelope(text_event("tok1", "hello")), client)
    assert client.replies == [("tok1", ("hello",))]


@pytest.mark.parametrize("kind", ["sticker", "image", "location", "audio", "video", "file"])
def test_unsupported_message_gets_fallback(client, kind):
    event = {"type": "message", "replyToken": "tok1",
             "message": {"id": "1", "type": kind, "text": "should not echo"}}
    handle(envelope(event), client)
    assert client.replies == [("tok1", (UNSUPPORTED_MESSAGE_TEXT,))]


def test_fallback_text():
    assert UNSUPPORTED_MESSAGE_TEXT == "おうむ返しに対応していないメッセージです"


def test_non_message_event_is_skipped(client):
    assert handle(envelope({"type": "follow", "replyToken": "tok1"}), client) == 0
    assert client.replies == []


def test_empty_events(client):
    assert handle(envelope(), client) == 0


def test_replies_follow_input_order(client):
    handle(envelope(text_event("t1", "a"), text_event("t2", "b")), client)
    assert [texts for _, texts in client.replies] == [("a",), ("b",)]


def test_first_failure_aborts_remaining_events():
    client = FakeClient(fail_on={"t1"})
    with pytest.raises(ReplyFailure) as exc_info:
        handle(envelope(text_event("t1", "a"), text_event("t2", "b")), client)
    assert client.replies == []
    assert exc_info.value.index == 0
    assert exc_info.value.reply_token == "t1"
    assert isinstance(exc_info.value.__cause__, LineApiError)


def test_failure_index_counts_skipped_events():
    client = FakeClient(fail_on={"t2"})
    with pytest.raises(ReplyFailure) as exc_info:
        handle(envelope(text_event("t1", "a"), {"type": "join"}, text_event("t2", "b"),
                        text_event("t3", "c")), client)
    assert exc_info.value.index == 2
    assert client.replies == [("t1", ("a",))]


def test_three_events_all_succeed(client):
    body = envelope(
        text_event("t1", "one"),
        {"type": "message", "replyToken": "t2", "message": {"id": "2", "type": "image"}},
        text_event("t3", "three"),
    )
    assert handle(body, client) == 3
    assert client.replies == [
        ("t1", ("one",)),
        ("t2", (UNSUPPORTED_MESSAGE_TEXT,)),
        ("t3", ("three",)),
    ]


def test_malformed_body_sends_nothing(client):
    body = b'{"events": [' + b'{"type":"message","replyToken":"t1","message":{"type":"text","text":"a"}},' + b'42]}'
    with pytest.raises(MalformedBody):
        handle(body, client)
    assert client.replies == []
