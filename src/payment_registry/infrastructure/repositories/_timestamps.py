from datetime import UTC, datetime


def to_column(value: datetime | None) -> datetime | None:
    """Normalize a datetime for a ``TIMESTAMP WITHOUT TIME ZONE`` column.

    Aware values are converted to UTC wall-clock time; naive values are stored
    as given.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
