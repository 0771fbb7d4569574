"""Receipt labels attached to gateway orders."""

import itertools
import secrets
import threading
import time

_counter = itertools.count(1)
_counter_lock = threading.Lock()


def new_receipt() -> str:
    """Return `receipt_<epoch-ms>_<counter>_<random>`.

    The timestamp alone collides for requests landing in the same millisecond;
    the counter keeps receipts unique within the process and the random suffix
    keeps them apart across processes.
    """

    with _counter_lock:
        seq = next(_counter)
    return f"receipt_{int(time.time() * 1000)}_{seq}_{secrets.token_hex(4)}"
