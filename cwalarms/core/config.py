from collections.abc import Mapping
from importlib.resources import files
from os import environ
from re import match
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, validate_email
from yaml import safe_load

from cwalarms.core import constants
from cwalarms.core.exceptions import ConfigurationError


class ForwarderConfig(BaseModel):
    """Construction-time settings of a forwarder."""

    model_config = ConfigDict(frozen=True)

    Environment: str
    WebhookUrl: str
    Timeout: float = constants.DELIVERY_TIMEOUT_SECONDS

    @field_validator("WebhookUrl")
    @classmethod
    def check_webhook_url(cls, v: str) -> str:
        url = urlsplit(v)
        assert url.scheme == "https", "Webhook URL must use https"
        assert url.hostname, "Webhook URL must have a host"
        return v

    @field_validator("Timeout")
    @classmethod
    def check_timeout(cls, v: float) -> float:
        assert v > 0, "Timeout must be positive"
        return v

    @classmethod
    def from_environ(cls, env: Mapping[str, str] = environ) -> "ForwarderConfig":
        """Read the forwarder settings from the Lambda environment variables."""
        config = {}
        for key, name in (
            ("Environment", constants.ENVIRONMENT),
            ("WebhookUrl", constants.WEBHOOK_URL),
        ):
            if not (value := env.get(name)):
                raise ConfigurationError(f"Environment variable '{name}' is not set")
            config[key] = value

        if timeout := env.get(constants.DELIVERY_TIMEOUT):
            config["Timeout"] = timeout

        try:
            return cls(**config)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid forwarder configuration: {e}") from e


class EnvironmentConfig(BaseModel):
    Environment: str
    AccountId: str | None = None
    Region: str = constants.DEFAULT_REGION

    # Notification targets
    SnsTopicArn: str | None = None
    TeamsWebhookUrl: str | None = None
    SlackWebhookUrl: str | None = None
    SmsPhoneNumbers: list[str] = []
    EmailAddresses: list[str] = []

    @field_validator("AccountId")
    @classmethod
    def check_account_id(cls, v: str | None) -> str | None:
        if v is not None:
            assert match(r"^[\d]{12}$", v), "Account ID must be exactly 12 digits long"
        return v

    @field_validator("SnsTopicArn")
    @classmethod
    def check_sns_topic_arn(cls, v: str | None) -> str | None:
        if v is not None:
            assert match(
                r"^arn:aws:sns:[a-z]{2}-[a-z]{4,9}-[\d]:[\d]{12}:[\w-]+$", v
            ), "Invalid SNS topic ARN"
        return v

    @field_validator("SmsPhoneNumbers")
    @classmethod
    def check_phone_numbers(cls, v: list[str]) -> list[str]:
        for phone_number in v:
            assert match(
                r"^\+[\d]{7,15}$", phone_number
            ), f"'{phone_number}' is not an E.164 phone number"
        return v

    @field_validator("EmailAddresses")
    @classmethod
    def check_emails(cls, v: list[str]) -> list[str]:
        emails = []
        for email in v:
            _, email = validate_email(email)
            emails.append(email)
        return emails

    def webhook_url(self, destination: str) -> str | None:
        match destination:
            case constants.SLACK:
                return self.SlackWebhookUrl
            case constants.TEAMS:
                return self.TeamsWebhookUrl
            case _:
                raise ConfigurationError(f"Unknown destination '{destination}'")

    def forwarder_config(self, destination: str) -> ForwarderConfig:
        """Build the settings of given destination's forwarder for this environment."""
        if not (webhook_url := self.webhook_url(destination)):
            raise ConfigurationError(
                f"No {destination} webhook URL configured for '{self.Environment}'"
            )

        try:
            return ForwarderConfig(Environment=self.Environment, WebhookUrl=webhook_url)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid {destination} webhook URL for '{self.Environment}': {e}"
            ) from e


def get_environment_config(environment: str) -> EnvironmentConfig:
    """Load given environment's settings from its packaged YAML file."""
    if environment not in constants.ENVIRONMENTS:
        raise ValueError(
            f"Unknown environment: {environment}. "
            f"Valid environments are: {', '.join(constants.ENVIRONMENTS)}"
        )

    config = safe_load(
        files("cwalarms.config").joinpath(f"{environment}.yaml").read_text()
    )
    return EnvironmentConfig(Environment=environment, **(config or {}))
