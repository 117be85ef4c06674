from __future__ import annotations
import random
import time
import uuid
from typing import Callable

ReqIdFactory = Callable[[], str]

_rng = random.SystemRandom()


def new_req_id() -> str:
    """
    Unix seconds followed by a zero-padded 6 digit random suffix,
    e.g. "1767000000042137". A correlation token only: practically
    unique per call, not globally unique.
    """
    return f"{int(time.time())}{_rng.randrange(1_000_000):06d}"


def uuid_req_id() -> str:
    # higher-entropy alternative, still a plain string on the wire
    return uuid.uuid4().hex
