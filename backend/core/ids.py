import time
from typing import Container


def timestamp_id(prefix: str, taken: Container[str] = ()) -> str:
    """`<prefix><epoch ms>`, bumped a millisecond at a time until unused."""
    ms = int(time.time() * 1000)
    while f"{prefix}{ms}" in taken:
        ms += 1
    return f"{prefix}{ms}"
