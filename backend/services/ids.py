import random
import time
from typing import Iterable


def generate_unique_id(existing: Iterable[int] = ()) -> int:
    """Timestamp in milliseconds plus a random offset, unique within ``existing``."""
    taken = set(existing)
    while True:
        candidate = int(time.time() * 1000) + random.randint(0, 999)
        if candidate not in taken:
            return candidate
