"""Order identifier generation.

Identifiers are short lookup tokens typed in or scanned at the counter,
not credentials, so a non-cryptographic random source is enough.  No
uniqueness check is made against stored orders.
"""

from __future__ import annotations

import random
import re
import string

ORDER_ID_PREFIX = "VG-"
ORDER_ID_LENGTH = 8
ORDER_ID_ALPHABET = string.ascii_uppercase + string.digits
ORDER_ID_PATTERN = re.compile(r"^VG-[A-Z0-9]{8}$")


def generate_order_id(rng: random.Random | None = None) -> str:
    """Return a new identifier such as ``VG-7Q2M0ZKA``."""
    source = rng or random
    suffix = "".join(source.choice(ORDER_ID_ALPHABET) for _ in range(ORDER_ID_LENGTH))
    return ORDER_ID_PREFIX + suffix
