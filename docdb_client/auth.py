"""
Master key authorization for the DocumentDB REST API.

Every request carries an ``Authorization`` header holding an HMAC-SHA256
signature over the verb, resource type, resource link and request date,
keyed with the base64-decoded account master key.
"""

import base64
import binascii
import datetime
import hashlib
import hmac
import logging
from email.utils import format_datetime
from typing import Optional, Tuple
from urllib.parse import quote_plus

from .constants import TOKEN_TYPE, TOKEN_VERSION
from .exceptions import KeyDecodeError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def format_timestamp(moment: datetime.datetime) -> str:
    """
    Format a moment as an RFC1123 date with the literal ``GMT`` zone.

    Naive datetimes are taken to be UTC already.

    Args:
        moment: Point in time to format

    Returns:
        Date string such as ``Mon, 02 Jan 2006 15:04:05 GMT``
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=datetime.timezone.utc)
    else:
        moment = moment.astimezone(datetime.timezone.utc)
    return format_datetime(moment, usegmt=True)


def build_signature_payload(verb: str, resource_id: str, resource_type: str, timestamp: str) -> str:
    """
    Build the string-to-sign.

    The verb, resource type and date are lowercased; the resource link keeps
    its case. The service compares the structure exactly, so the resource id
    for listing databases must be the empty string.
    """
    return "%s\n%s\n%s\n%s\n\n" % (
        verb.lower(),
        resource_type.lower(),
        resource_id,
        timestamp.lower(),
    )


def decode_master_key(master_key: str) -> bytes:
    """
    Decode a base64 master key into raw HMAC key bytes.

    Raises:
        KeyDecodeError: If the key is not valid base64
    """
    try:
        return base64.b64decode(master_key, validate=True)
    except (binascii.Error, ValueError) as e:
        raise KeyDecodeError(f"Master key is not valid base64: {e}") from e


def generate_auth_token(
    verb: str,
    resource_id: str,
    resource_type: str,
    master_key: str,
    now: Optional[datetime.datetime] = None,
) -> Tuple[str, str]:
    """
    Generate a master key authorization token.

    The returned timestamp is the one covered by the signature and must be
    sent unchanged as the ``x-ms-date`` header.

    Args:
        verb: HTTP method (GET, POST, ...)
        resource_id: Resource link, e.g. ``dbs/mydb`` ("" for the account root)
        resource_type: Resource type, ``dbs`` or ``colls``
        master_key: Base64-encoded account master key
        now: Moment to sign at (defaults to the current UTC time)

    Returns:
        Tuple of (url-escaped token, timestamp)

    Raises:
        KeyDecodeError: If the master key is not valid base64
    """
    key = decode_master_key(master_key)

    timestamp = format_timestamp(now if now is not None else _utcnow())
    payload = build_signature_payload(verb, resource_id, resource_type, timestamp)
    logger.debug("Signing %s %s request for %r at %s", verb, resource_type, resource_id, timestamp)

    digest = hmac.new(key, payload.encode('utf-8'), hashlib.sha256).digest()
    signature = base64.b64encode(digest).decode('ascii')

    token = f"type={TOKEN_TYPE}&ver={TOKEN_VERSION}&sig={signature}"
    return quote_plus(token, safe=''), timestamp
