import os
import re
import time

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def new_object_id() -> str:
    """
    Generate a 24-character hex storage identifier.

    The first 4 bytes are the big-endian Unix timestamp, the remaining 8 are
    random, so identifiers sort roughly by creation time.
    """
    timestamp = int(time.time()).to_bytes(4, "big")
    return (timestamp + os.urandom(8)).hex()


def is_valid_object_id(value: str) -> bool:
    return bool(value) and OBJECT_ID_PATTERN.match(value) is not None
