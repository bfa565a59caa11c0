from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import bcrypt
import pytest

from osas_connect.app.services.invitation_tokens import build_accept_url, generate_token, hash_token
from osas_connect.app.services.notification_dispatcher import NotificationDispatcher
from osas_connect.app.services.passwords import hash_password
from osas_connect.app.use_cases.invitations.notify import (
    build_invitation_notification,
    dispatch_invitation,
)
from osas_connect.domain.entities import UserRole
from tests.unit.factories import make_user


def test_generated_tokens_are_unique_and_stored_as_hash():
    token_a, hash_a = generate_token()
    token_b, hash_b = generate_token()

    assert token_a != token_b
    assert len(token_a) >= 43  # 32 random bytes, base64url
    assert hash_a == hash_token(token_a)
    assert hash_a != token_a
    assert len(hash_a) == 64


def test_accept_url_carries_the_raw_token():
    token, _ = generate_token()

    url = build_accept_url("https://osas.example.edu/", token)

    parsed = urlparse(url)
    assert parsed.path == "/invitations/accept"
    assert parse_qs(parsed.query)["token"] == [token]


def test_notification_payload_contract():
    inviter = make_user(UserRole.admin, first_name="Elena", last_name="Cruz")

    payload = build_invitation_notification(
        inviter, "https://osas.example.edu", "tok", datetime(2026, 3, 9, 9, 30)
    )

    assert payload.model_dump() == {
        "inviter_name": "Elena Cruz",
        "accept_url": "https://osas.example.edu/invitations/accept?token=tok",
        "expires_at": "2026-03-09T09:30:00",
    }


@pytest.mark.asyncio
async def test_dispatch_failure_is_logged_not_raised(caplog):
    dispatcher = MagicMock(spec=NotificationDispatcher)
    dispatcher.send_invitation = AsyncMock(side_effect=ConnectionError("smtp down"))
    payload = build_invitation_notification(make_user(), "http://x", "tok", datetime(2026, 1, 1))

    delivered = await dispatch_invitation(dispatcher, "a@x.com", payload)

    assert delivered is False
    assert "Failed to dispatch invitation email to a@x.com" in caplog.text


def test_password_hash_roundtrip():
    hashed = hash_password("correct horse")

    assert hashed != "correct horse"
    assert bcrypt.checkpw(b"correct horse", hashed.encode())
    assert not bcrypt.checkpw(b"wrong horse", hashed.encode())
