import base64
import binascii
import json
import logging
import os
from dataclasses import dataclass
from typing import Mapping

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import ClientInitFailure
from .line_api import REPLY_ENDPOINT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    channel_secret: str
    channel_access_token: str
    reply_endpoint: str = REPLY_ENDPOINT
    request_timeout: float = 30


def get_secret_json(name: str, secrets=None) -> dict:
    try:
        secrets = secrets or boto3.client("secretsmanager")
        resp = secrets.get_secret_value(SecretId=name)
    except (BotoCoreError, ClientError) as e:
        raise ClientInitFailure(f"can't read secret {name}: {e}") from e

    try:
        if "SecretString" in resp:
            s = resp["SecretString"]
        else:
            s = base64.b64decode(resp["SecretBinary"]).decode()
        cfg = json.loads(s) if s else {}
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ClientInitFailure(f"secret {name} is not a JSON document") from e
    if not isinstance(cfg, dict):
        raise ClientInitFailure(f"secret {name} is not a JSON object")
    for key in ("channelSecret", "channelAccessToken"):
        if key in cfg and not isinstance(cfg[key], str):
            raise ClientInitFailure(f"secret {name}: {key} is not a string")
    return cfg


def load_config(environ: Mapping[str, str] = os.environ, secrets=None) -> Config:
    """
    Read credentials once, on the first invocation. Unreadable or invalid
    values raise ClientInitFailure; empty credentials are rejected later by
    the handler and the reply client.
    """
    channel_secret = environ.get("CHANNEL_SECRET", "")
    channel_access_token = environ.get("CHANNEL_ACCESS_TOKEN", "")

    secret_name = environ.get("LINE_SECRET_NAME")
    if secret_name:
        cfg = get_secret_json(secret_name, secrets)
        channel_secret = cfg.get("channelSecret") or channel_secret
        channel_access_token = cfg.get("channelAccessToken") or channel_access_token
        logger.info({"config_source": "secretsmanager", "secret_name": secret_name})

    timeout = environ.get("LINE_REQUEST_TIMEOUT") or "30"
    try:
        request_timeout = float(timeout)
    except ValueError as e:
        raise ClientInitFailure(f"LINE_REQUEST_TIMEOUT is not a number: {timeout!r}") from e
    if request_timeout <= 0:
        raise ClientInitFailure(f"LINE_REQUEST_TIMEOUT must be positive: {timeout!r}")

    return Config(
        channel_secret=channel_secret,
        channel_access_token=channel_access_token,
        reply_endpoint=environ.get("LINE_REPLY_ENDPOINT") or REPLY_ENDPOINT,
        request_timeout=request_timeout,
    )
