import logging

from .errors import LineApiError, ReplyFailure
from .events import EVENT_TYPE_MESSAGE, Event, TextMessage, parse_events

logger = logging.getLogger(__name__)

UNSUPPORTED_MESSAGE_TEXT = "おうむ返しに対応していないメッセージです"


def reply_text_for(event: Event) -> str:
    if isinstance(event.message, TextMessage):
        return event.message.text
    return UNSUPPORTED_MESSAGE_TEXT


def dispatch(events: list[Event], client) -> int:
    """
    Reply to each message event in order. The first failed reply aborts the
    batch: later events are not attempted and nothing is retried.
    Returns the number of replies sent.
    """
    sent = 0
    for index, event in enumerate(events):
        if event.type != EVENT_TYPE_MESSAGE:
            logger.info({"skipped_event": event.type, "index": index})
            continue
        try:
            client.reply_message(event.reply_token, reply_text_for(event))
        except LineApiError as e:
            raise ReplyFailure(f"can't reply to event {index}: {e}", index, event.reply_token) from e
        sent += 1
    return sent


def handle(body: bytes, client) -> int:
    return dispatch(parse_events(body), client)
