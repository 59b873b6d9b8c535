from enum import Enum

from pydantic import BaseModel, ConfigDict

from cwalarms.core import constants


class Severity(Enum):
    URGENT = "urgent"
    RESOLVED = "resolved"
    CAUTION = "caution"


def severity_for(state: str) -> Severity:
    """Map an alarm state to its severity, unknown states being a caution."""
    if state == constants.ALARM:
        return Severity.URGENT
    if state == constants.OK:
        return Severity.RESOLVED
    return Severity.CAUTION


class AlarmEvent(BaseModel):
    """CloudWatch alarm state change, as published to SNS."""

    model_config = ConfigDict(frozen=True)

    # Guaranteed fields
    AlarmName: str
    NewStateValue: str
    NewStateReason: str
    StateChangeTime: str

    # Conditional fields
    AlarmDescription: str | None = None
    Region: str | None = None
    AlarmArn: str | None = None

    @property
    def severity(self) -> Severity:
        return severity_for(self.NewStateValue)

    @property
    def region(self) -> str:
        return self.Region or constants.DEFAULT_REGION
