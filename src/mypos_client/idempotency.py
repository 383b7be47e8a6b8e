from __future__ import annotations

import uuid

IDEMPOTENCY_HEADER = "Idempotency-Key"


def new_idempotency_key() -> str:
    return str(uuid.uuid4())


def resolve_idempotency_key(idempotency_key: str | None = None) -> str:
    return idempotency_key or new_idempotency_key()


def idempotency_headers(idempotency_key: str) -> dict[str, str]:
    return {IDEMPOTENCY_HEADER: idempotency_key}
