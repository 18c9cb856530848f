import math
import time
from datetime import UTC, datetime
from typing import Any

from zcap_invoke.errors import InvalidTimestamp

DEFAULT_EXPIRES_SECONDS = 600

Timestamp = int | float | str | datetime


def to_unix_seconds(value: Any, *, field: str) -> int:
    if isinstance(value, bool):
        raise InvalidTimestamp(f'"{field}" must be a timestamp, not a boolean.')
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return math.floor(value.timestamp())
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidTimestamp(f'"{field}" must be a finite number.')
        return math.floor(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            number = float(text)
        except ValueError:
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError as exc:
                raise InvalidTimestamp(
                    f'"{field}" is not a valid timestamp: "{value}"', cause=exc
                ) from exc
            return to_unix_seconds(parsed, field=field)
        return to_unix_seconds(number, field=field)
    raise InvalidTimestamp(f'"{field}" must be a number of seconds or a datetime.')


def resolve_created(created: Timestamp | None = None) -> int:
    if created is None:
        return int(time.time())
    return to_unix_seconds(created, field="created")


def resolve_expires(
    created: int,
    expires: Timestamp | None = None,
    *,
    window: int = DEFAULT_EXPIRES_SECONDS,
) -> int:
    if expires is None:
        return created + window
    return to_unix_seconds(expires, field="expires")
