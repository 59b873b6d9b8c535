from json import dumps
from time import sleep
from typing import Any

import httpx
from aws_lambda_powertools.utilities.data_classes import SNSEvent

from . import constants


def make_alarm_message(**overrides: Any) -> dict[str, Any]:
    """CloudWatch alarm state change; `None` overrides drop the field."""
    message = {
        "AlarmName": constants.ALARM_NAME,
        "AlarmDescription": "CPU utilization above 80%",
        "AWSAccountId": "123456789012",
        "NewStateValue": "ALARM",
        "NewStateReason": "Threshold crossed",
        "StateChangeTime": constants.STATE_CHANGE_TIME,
        "Region": constants.REGION,
        "AlarmArn": constants.ALARM_ARN,
        "OldStateValue": "OK",
    }
    message.update(overrides)
    return {key: value for key, value in message.items() if value is not None}


def make_sns_record(message: dict[str, Any] | str) -> dict[str, Any]:
    return {
        "EventSource": "aws:sns",
        "EventVersion": "1.0",
        "EventSubscriptionArn": f"{constants.TOPIC_ARN}:2bcfbf39-05c3-41de-beaa-fcfcc21c8f55",
        "Sns": {
            "Type": "Notification",
            "MessageId": "95df01b4-ee98-5cb9-9903-4c221d41eb5e",
            "TopicArn": constants.TOPIC_ARN,
            "Subject": f'ALARM: "{constants.ALARM_NAME}" in US East (N. Virginia)',
            "Message": message if isinstance(message, str) else dumps(message),
            "Timestamp": "2024-01-01T00:00:01.000Z",
            "SignatureVersion": "1",
            "MessageAttributes": {},
        },
    }


def make_sns_envelope(*messages: dict[str, Any] | str) -> dict[str, Any]:
    return {"Records": [make_sns_record(message) for message in messages]}


def make_sns_event(*messages: dict[str, Any] | str) -> SNSEvent:
    return SNSEvent(make_sns_envelope(*messages))


class DribblingStream(httpx.SyncByteStream):
    """Response body trickling in one chunk at a time."""

    def __init__(self, chunks: int, delay: float) -> None:
        self.chunks = chunks
        self.delay = delay

    def __iter__(self):
        for _ in range(self.chunks):
            sleep(self.delay)
            yield b"."
