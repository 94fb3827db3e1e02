import time
from uuid import uuid4


def time_token(prefix: str) -> str:
    """
    Build a time-derived identifier such as ``BK1718000000000a1b2c3d4``.

    Millisecond timestamp keeps tokens roughly sortable; the random suffix keeps
    two tokens minted in the same millisecond apart.
    """
    return f"{prefix}{int(time.time() * 1000)}{uuid4().hex[:8]}"


def generate_booking_id() -> str:
    return time_token("BK")


def generate_transaction_id() -> str:
    return time_token("TXN")
