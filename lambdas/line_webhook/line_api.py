import logging

import requests

from .errors import ClientInitFailure, LineApiError

logger = logging.getLogger(__name__)

REPLY_ENDPOINT = "https://api.line.me/v2/bot/message/reply"


class LineClient:
    """Minimal client for the LINE Messaging API reply endpoint."""

    def __init__(self, channel_secret: str, channel_access_token: str,
                 endpoint: str = REPLY_ENDPOINT, timeout: float = 30):
        if not channel_secret:
            raise ClientInitFailure("missing channel secret")
        if not channel_access_token:
            raise ClientInitFailure("missing channel access token")
        self.endpoint = endpoint
        self.timeout = timeout
        self._headers = {
            "Authorization": f"Bearer {channel_access_token}",
            "Content-Type": "application/json",
        }

    def reply_message(self, reply_token: str, *texts: str):
        body = {
            "replyToken": reply_token,
            "messages": [{"type": "text", "text": t} for t in texts],
        }
        try:
            r = requests.post(self.endpoint, json=body, headers=self._headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise LineApiError(f"reply request failed: {e}") from e
        if r.status_code // 100 != 2:
            raise LineApiError(f"reply rejected with status {r.status_code}",
                               status_code=r.status_code, body=r.text)
        logger.debug({"replied": reply_token, "messages": len(texts)})
        return r
