from __future__ import annotations

import random
import string

from .errors import InvalidArgumentError

ID_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
DEFAULT_ID_LENGTH = 10


def generate_id(length: int = DEFAULT_ID_LENGTH, *, rng: random.Random | None = None) -> str:
    """
    Draw `length` characters uniformly from [A-Za-z0-9].

    Not cryptographically secure and not checked against existing ids.
    """
    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        raise InvalidArgumentError(f"id length must be a positive int, got {length!r}")
    source = rng if rng is not None else random
    return "".join(source.choices(ID_ALPHABET, k=length))
