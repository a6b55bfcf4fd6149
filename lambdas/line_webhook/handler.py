import base64
import binascii
import logging

from .config import Config, load_config
from .dispatcher import handle
from .errors import ClientInitFailure, InvalidSignature, WebhookError
from .line_api import LineClient
from .signature import verify_signature

logger = logging.getLogger()
logger.setLevel(logging.INFO)

SIGNATURE_HEADER = "x-line-signature"

# loaded on the first invocation
CONFIG: Config | None = None


def get_config() -> Config:
    global CONFIG
    if CONFIG is None:
        CONFIG = load_config()
    return CONFIG


def get_header(headers: dict | None, name: str) -> str:
    # REST APIs keep the sender's casing, HTTP APIs lower-case everything
    for key, value in (headers or {}).items():
        if key.lower() == name:
            return value or ""
    return ""


def raw_body(event: dict) -> bytes:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            # not authenticated yet
            raise InvalidSignature(f"body is not valid base64: {e}") from e
    if isinstance(body, bytes):
        return body
    return body.encode()


def handle_request(config: Config, event: dict) -> dict:
    if not config.channel_secret:
        raise ClientInitFailure("CHANNEL_SECRET is not set")

    body = raw_body(event)
    signature = get_header(event.get("headers"), SIGNATURE_HEADER)
    if not verify_signature(config.channel_secret, signature, body):
        raise InvalidSignature("invalid: wrong signature")

    client = LineClient(
        config.channel_secret,
        config.channel_access_token,
        endpoint=config.reply_endpoint,
        timeout=config.request_timeout,
    )
    sent = handle(body, client)
    logger.info({"replies_sent": sent})
    return {"statusCode": 200}


def handler(event, context):
    try:
        return handle_request(get_config(), event)
    except WebhookError as e:
        logger.error({
            "error": type(e).__name__,
            "detail": str(e),
            "index": getattr(e, "index", None),
        })
        raise
