"""
Khata Primitives — Record Ids
===============================
Short, url-safe record ids (nine base-36 characters).
"""

from __future__ import annotations

import string
import uuid

_ALPHABET = string.digits + string.ascii_lowercase
RECORD_ID_LENGTH = 9


def new_record_id() -> str:
    number = uuid.uuid4().int
    chars = []
    for _ in range(RECORD_ID_LENGTH):
        number, remainder = divmod(number, 36)
        chars.append(_ALPHABET[remainder])
    return "".join(chars)
