# facultyeval/core/tokens.py
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import uuid
from typing import Optional

from facultyeval.core.settings import settings

SIG_BYTES = 10


def _secret() -> bytes:
    secret = (settings.SESSION_SECRET or "").encode()
    if not secret:
        raise RuntimeError("SESSION_SECRET not configured")
    return secret


def make_token(user_id: uuid.UUID | str) -> str:
    """Sign-in token for a profile: base32(uuid bytes + truncated HMAC)."""
    uid = user_id if isinstance(user_id, uuid.UUID) else uuid.UUID(str(user_id))
    pid = uid.bytes  # 16 bytes
    sig = hmac.new(_secret(), pid, hashlib.sha256).digest()[:SIG_BYTES]
    b32 = base64.b32encode(pid + sig).decode().rstrip("=")  # A-Z2-7

    return "-".join(b32[i:i + 4] for i in range(0, len(b32), 4))


def parse_token(token: str) -> Optional[uuid.UUID]:
    if not token:
        return None
    secret = _secret()
    b32 = token.strip().replace("-", "").upper()
    pad = "=" * ((8 - (len(b32) % 8)) % 8)
    try:
        raw = base64.b32decode(b32 + pad)
    except (binascii.Error, ValueError):
        return None

    pid, sig = raw[:16], raw[16:]
    if len(pid) != 16 or len(sig) != SIG_BYTES:
        return None
    check = hmac.new(secret, pid, hashlib.sha256).digest()[:SIG_BYTES]
    if hmac.compare_digest(sig, check):
        return uuid.UUID(bytes=pid)
    return None
