"""AES-256-GCM helpers for provider tokens at rest.

Ciphertexts are stored as ``iv.tag.data`` with each part base64 encoded.
"""

from __future__ import annotations

import base64
import binascii
import os
import re

from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

IV_BYTES = 16
TAG_BYTES = 16
KEY_BYTES = 32

_HEX_KEY = re.compile(r"^[0-9a-fA-F]{64}$")


def get_key() -> bytes:
    raw = getattr(settings, "TOKEN_ENCRYPTION_KEY", "") or ""
    if not raw:
        msg = "Missing TOKEN_ENCRYPTION_KEY"
        raise ImproperlyConfigured(msg)
    if _HEX_KEY.match(raw):
        return bytes.fromhex(raw)
    try:
        key = base64.b64decode(raw, validate=True)
    except binascii.Error as exc:
        msg = "TOKEN_ENCRYPTION_KEY must be 32 bytes (hex or base64)"
        raise ImproperlyConfigured(msg) from exc
    if len(key) != KEY_BYTES:
        msg = "TOKEN_ENCRYPTION_KEY must be 32 bytes (hex or base64)"
        raise ImproperlyConfigured(msg)
    return key


def encrypt_token(plaintext: str) -> str:
    iv = os.urandom(IV_BYTES)
    sealed = AESGCM(get_key()).encrypt(iv, plaintext.encode("utf-8"), None)
    data, tag = sealed[:-TAG_BYTES], sealed[-TAG_BYTES:]
    return ".".join(base64.b64encode(part).decode("ascii") for part in (iv, tag, data))


def decrypt_token(token: str) -> str:
    iv_b64, tag_b64, data_b64 = token.split(".")
    iv = base64.b64decode(iv_b64)
    tag = base64.b64decode(tag_b64)
    data = base64.b64decode(data_b64)
    return AESGCM(get_key()).decrypt(iv, data + tag, None).decode("utf-8")
