from json import loads

from aws_lambda_powertools.utilities.data_classes import SNSEvent
from pydantic import ValidationError

from cwalarms.core.exceptions import MalformedEventError
from cwalarms.core.types import AlarmEvent
from cwalarms.core.utils.logger import get_logger

logger = get_logger()


def parse_alarm_event(event: SNSEvent) -> AlarmEvent:
    """Extract the alarm state change carried by the first record of an SNS envelope."""
    try:
        records = list(event.records)
    except (KeyError, TypeError) as e:
        raise MalformedEventError("SNS envelope has no 'Records'") from e

    if not records:
        raise MalformedEventError("SNS envelope has no records")
    if len(records) > 1:
        logger.warning(
            "SNS envelope carries %d records, only the first will be forwarded",
            len(records),
        )

    try:
        message = loads(records[0].sns.message)
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedEventError(f"Unreadable SNS message: {e}") from e

    if not isinstance(message, dict):
        raise MalformedEventError("SNS message is not a JSON object")

    try:
        return AlarmEvent(**message)
    except (ValidationError, TypeError) as e:
        raise MalformedEventError(f"SNS message is not an alarm state change: {e}") from e
