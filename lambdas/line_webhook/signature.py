import base64
import binascii
import hashlib
import hmac


def verify_signature(channel_secret: str, signature: str, body: bytes) -> bool:
    """
    Check an X-Line-Signature header against the raw request body.
    The header is base64(HMAC-SHA256(channel_secret, body)).
    """
    if not signature:
        return False
    try:
        decoded = base64.b64decode(signature, validate=True)
    except (binascii.Error, ValueError):
        return False
    mac = hmac.new(channel_secret.encode(), msg=body, digestmod=hashlib.sha256)
    return hmac.compare_digest(decoded, mac.digest())
