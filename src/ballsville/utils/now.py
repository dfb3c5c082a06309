from datetime import UTC, datetime, timedelta

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class Now:
    @staticmethod
    def as_datetime() -> datetime:
        """Return the current UTC time as a datetime object."""

        return datetime.now(UTC)

    @staticmethod
    def as_milliseconds() -> int:
        """Return the current UTC time as an integer timestamp in milliseconds."""

        return (datetime.now(UTC) - _EPOCH) // timedelta(milliseconds=1)

    @staticmethod
    def to_utc(dt: datetime | None) -> datetime | None:
        """Convert a datetime object to UTC timezone."""

        if dt is None:
            return None
        if dt.tzinfo is None:
            return dt.replace(tzinfo=UTC)
        return dt.astimezone(UTC)

    @staticmethod
    def iso_from_milliseconds(value_ms: int) -> str:
        """Return the ISO-8601 UTC string (millisecond precision, ``Z`` suffix) for an epoch-ms value."""

        seconds, millis = divmod(int(value_ms), 1000)
        return Now.to_iso(datetime.fromtimestamp(seconds, tz=UTC) + timedelta(milliseconds=millis))

    @staticmethod
    def to_iso(dt: datetime) -> str:
        """Return ``dt`` as an ISO-8601 UTC string with millisecond precision and a ``Z`` suffix."""

        return Now.to_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    @staticmethod
    def milliseconds_from_iso(value: str) -> int | None:
        """Parse an ISO-8601 timestamp into epoch milliseconds, or None when unparseable."""

        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except (AttributeError, ValueError):
            return None
        return (Now.to_utc(dt) - _EPOCH) // timedelta(milliseconds=1)
