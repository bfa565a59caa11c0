"""
Invitation token helpers.

Raw tokens only ever travel in the accept URL; storage keeps the SHA-256 hex
digest so a database leak cannot be replayed into an acceptance.
"""

import hashlib
import secrets
from typing import Tuple
from urllib.parse import urlencode

TOKEN_BYTES = 32  # 256 bits of entropy


def generate_token() -> Tuple[str, str]:
    """Return (raw_token, token_hash)"""
    token = secrets.token_urlsafe(TOKEN_BYTES)
    return token, hash_token(token)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def build_accept_url(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/invitations/accept?{urlencode({'token': token})}"
