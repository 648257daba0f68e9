"""Identifier generation for tasks and share links.

Task ids are random UUID4 strings. Share tokens are drawn from the ``secrets``
module, so they are safe to hand out as capability links.
"""
from __future__ import annotations

import secrets
import string
import uuid

SHARE_ID_LENGTH = 12
SHARE_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_task_id() -> str:
    return str(uuid.uuid4())


def new_share_id(length: int = SHARE_ID_LENGTH) -> str:
    return "".join(secrets.choice(SHARE_ID_ALPHABET) for _ in range(length))
