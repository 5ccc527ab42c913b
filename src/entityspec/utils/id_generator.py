import secrets
import time
import uuid

PK_MODULUS = 1_000_000_000_000
_INT64_MASK = (1 << 64) - 1
_POSITIVE_INT64_MASK = (1 << 63) - 1


def _signed64(value: int) -> int:
    value &= _INT64_MASK
    return value - (1 << 64) if value >= 1 << 63 else value


def new_sk() -> str:
    """Random secondary key (canonical 36-char UUID4 string)."""
    return str(uuid.uuid4())


def generate_pk(sk: str, now_ms: int | None = None) -> int:
    """
    Derive the short numeric key from a secondary key and the current time.

    The result always fits in 12 decimal digits. It is deterministic for a
    given (sk, now_ms) pair but not collision-free; uniqueness is left to the
    store's unique constraint.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    u = uuid.UUID(sk)
    most = _signed64(u.int >> 64)
    least = _signed64(u.int)
    return abs(_signed64(most - _signed64(least + now_ms))) % PK_MODULUS


def generate_new_pk() -> int:
    """Cryptographically random positive 63-bit key."""
    return (secrets.randbits(64) ^ time.monotonic_ns()) & _POSITIVE_INT64_MASK
