import json
from dataclasses import dataclass

from .errors import MalformedBody

EVENT_TYPE_MESSAGE = "message"
MESSAGE_TYPE_TEXT = "text"


@dataclass(frozen=True)
class TextMessage:
    id: str | None
    text: str


@dataclass(frozen=True)
class OtherMessage:
    # image, video, audio, file, location, sticker, ...
    id: str | None
    kind: str


Message = TextMessage | OtherMessage


@dataclass(frozen=True)
class Event:
    type: str
    reply_token: str | None = None
    message: Message | None = None


def parse_message(raw: dict, index: int) -> Message:
    kind = raw.get("type")
    if not isinstance(kind, str) or not kind:
        raise MalformedBody(f"event {index}: message has no type", index)
    if kind == MESSAGE_TYPE_TEXT:
        text = raw.get("text")
        if not isinstance(text, str):
            raise MalformedBody(f"event {index}: text message has no text", index)
        return TextMessage(id=raw.get("id"), text=text)
    return OtherMessage(id=raw.get("id"), kind=kind)


def parse_event(raw: dict, index: int) -> Event:
    if not isinstance(raw, dict):
        raise MalformedBody(f"event {index} is not an object", index)
    event_type = raw.get("type")
    if not isinstance(event_type, str):
        raise MalformedBody(f"event {index} has no type", index)
    reply_token = raw.get("replyToken")

    if event_type != EVENT_TYPE_MESSAGE:
        return Event(type=event_type, reply_token=reply_token)

    if not isinstance(reply_token, str) or not reply_token:
        raise MalformedBody(f"event {index}: message event has no replyToken", index)
    message = raw.get("message")
    if not isinstance(message, dict):
        raise MalformedBody(f"event {index}: message event has no message", index)
    return Event(type=event_type, reply_token=reply_token, message=parse_message(message, index))


def parse_events(body: bytes) -> list[Event]:
    """
    Decode a webhook body into events, preserving their order.
    The whole envelope is validated before anything is returned.
    """
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedBody(f"body is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise MalformedBody("body is not a JSON object")

    raw_events = payload.get("events", [])
    if not isinstance(raw_events, list):
        raise MalformedBody("'events' is not a list")
    return [parse_event(raw, i) for i, raw in enumerate(raw_events)]
