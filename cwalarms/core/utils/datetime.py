from datetime import datetime, timezone

from dateutil.parser import ParserError, parse


def to_locale_string(date_string: str) -> str:
    """Render given timestamp as an en-US date and time in UTC, e.g. `1/1/2024, 12:00:00 AM`.

    Timestamps that can't be parsed or expressed in UTC are returned unchanged.
    """
    try:
        instant = parse(date_string)
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        instant = instant.astimezone(timezone.utc)
    except (ParserError, OverflowError, TypeError):
        return date_string

    hour = instant.hour % 12 or 12
    return f"{instant.month}/{instant.day}/{instant.year}, {hour}:{instant:%M:%S %p}"


def epoch_seconds() -> int:
    return int(datetime.now(timezone.utc).timestamp())
