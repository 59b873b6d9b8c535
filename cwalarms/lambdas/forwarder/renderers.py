"""
Destination dialects of the forwarder.

Each renderer turns an `AlarmEvent` into the JSON payload its webhook accepts.
Both share the same display fields and console link; only the payload shape,
the colours and the wording differ.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

from cwalarms.core import constants
from cwalarms.core.types import AlarmEvent, Severity
from cwalarms.core.utils.datetime import epoch_seconds, to_locale_string


def console_url(alarm_event: AlarmEvent) -> str | None:
    """Deep link to the alarm in the CloudWatch console, if the event names its ARN."""
    if not alarm_event.AlarmArn:
        return None

    return constants.CLOUDWATCH_CONSOLE_ALARM_URL_TEMPLATE.substitute(
        region=alarm_event.region,
        alarm_name=quote(alarm_event.AlarmName, safe="!*'()"),
    )


def display_fields(alarm_event: AlarmEvent, environment: str) -> list[tuple[str, str]]:
    return [
        ("Status", alarm_event.NewStateValue),
        ("Environment", environment),
        ("Region", alarm_event.region),
        ("Time", to_locale_string(alarm_event.StateChangeTime)),
        ("Reason", alarm_event.NewStateReason),
    ]


class PayloadRenderer(ABC):
    name: str
    colors: dict[Severity, str]

    @abstractmethod
    def render(self, alarm_event: AlarmEvent, environment: str) -> dict[str, Any]:
        """Build the webhook payload for given alarm state change."""


class SlackRenderer(PayloadRenderer):
    name = "Slack"
    colors = {
        Severity.URGENT: "danger",
        Severity.RESOLVED: "good",
        Severity.CAUTION: "warning",
    }
    emojis = {
        Severity.URGENT: ":rotating_light:",
        Severity.RESOLVED: ":white_check_mark:",
        Severity.CAUTION: ":warning:",
    }

    def __init__(self, clock: Callable[[], int] = epoch_seconds) -> None:
        self.clock = clock

    def render(self, alarm_event: AlarmEvent, environment: str) -> dict[str, Any]:
        attachment = {
            "color": self.colors[alarm_event.severity],
            "title": f"{self.emojis[alarm_event.severity]} {alarm_event.AlarmName}",
            "text": alarm_event.AlarmDescription or "CloudWatch Alarm",
            "fields": [
                {"title": title, "value": value, "short": title != "Reason"}
                for title, value in display_fields(alarm_event, environment)
            ],
            "footer": "AWS CloudWatch Alarms",
            "ts": self.clock(),
        }

        if url := console_url(alarm_event):
            attachment["actions"] = [
                {"type": "button", "text": "View in Console", "url": url}
            ]

        return {
            "username": "AWS CloudWatch",
            "icon_emoji": ":aws:",
            "attachments": [attachment],
        }


class TeamsRenderer(PayloadRenderer):
    name = "Teams"
    colors = {
        Severity.URGENT: "FF0000",
        Severity.RESOLVED: "00FF00",
        Severity.CAUTION: "FFA500",
    }

    def render(self, alarm_event: AlarmEvent, environment: str) -> dict[str, Any]:
        card = {
            "@type": "MessageCard",
            "@context": "https://schema.org/extensions",
            "summary": alarm_event.AlarmName,
            "themeColor": self.colors[alarm_event.severity],
            "title": alarm_event.AlarmName,
            "sections": [
                {
                    "activityTitle": "CloudWatch Alarm Notification",
                    "activitySubtitle": alarm_event.AlarmDescription or "",
                    "facts": [
                        {"name": name, "value": value}
                        for name, value in display_fields(alarm_event, environment)
                    ],
                }
            ],
        }

        if url := console_url(alarm_event):
            card["potentialAction"] = [
                {
                    "@type": "OpenUri",
                    "name": "View in AWS Console",
                    "targets": [{"os": "default", "uri": url}],
                }
            ]

        return card


RENDERERS: dict[str, type[PayloadRenderer]] = {
    constants.SLACK: SlackRenderer,
    constants.TEAMS: TeamsRenderer,
}
