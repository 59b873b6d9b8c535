from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Any

import httpx
from aws_lambda_powertools.utilities.data_classes import SNSEvent

from cwalarms.core.config import ForwarderConfig
from cwalarms.core.exceptions import (
    ConfigurationError,
    DestinationError,
    ForwarderError,
    TransportFailure,
)
from cwalarms.core.types import AlarmEvent
from cwalarms.core.utils.logger import get_logger
from cwalarms.lambdas.forwarder.event import parse_alarm_event
from cwalarms.lambdas.forwarder.renderers import PayloadRenderer

logger = get_logger()

HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class DeliveryResult:
    status_code: int
    body: str

    def as_response(self) -> dict[str, Any]:
        return {"statusCode": self.status_code, "body": self.body}


class Forwarder:
    def __init__(
        self,
        config: ForwarderConfig,
        renderer: PayloadRenderer,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer
        self.transport = transport

    @property
    def destination(self) -> str:
        return self.renderer.name

    def render(self, alarm_event: AlarmEvent) -> dict[str, Any]:
        return self.renderer.render(alarm_event, self.config.Environment)

    def forward(self, alarm_event: AlarmEvent) -> DeliveryResult:
        """Deliver given alarm state change to the destination webhook, exactly once."""
        payload = self.render(alarm_event)

        try:
            response = self._post(payload)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid {self.destination} webhook URL") from e
        except (FutureTimeoutError, httpx.TimeoutException) as e:
            logger.exception(
                "%s request timed out after %ss", self.destination, self.config.Timeout
            )
            raise TransportFailure(
                f"{self.destination} request timed out after {self.config.Timeout}s",
                self.destination,
            ) from e
        except httpx.RequestError as e:
            logger.exception("%s request error: %s", self.destination, e)
            raise TransportFailure(
                f"{self.destination} request error: {e}", self.destination
            ) from e

        logger.info(
            "%s response: %d %s", self.destination, response.status_code, response.text
        )

        if response.status_code != 200:
            logger.error(
                "%s rejected '%s': %d - %s",
                self.destination,
                alarm_event.AlarmName,
                response.status_code,
                response.text,
            )
            raise DestinationError(self.destination, response.status_code, response.text)

        return DeliveryResult(200, f"Message sent to {self.destination}")

    def _post(self, payload: dict[str, Any]) -> httpx.Response:
        """POST given payload, the whole exchange being bounded by the configured timeout.

        httpx only bounds each connect, write and read on its own, so the request
        runs on a worker thread and is abandoned once the deadline passes. Closing
        the client drops its connections, which ends the worker's pending read.
        """
        client = httpx.Client(timeout=self.config.Timeout, transport=self.transport)
        executor = ThreadPoolExecutor(max_workers=1)

        try:
            future = executor.submit(
                client.post, self.config.WebhookUrl, json=payload, headers=HEADERS
            )
            return future.result(timeout=self.config.Timeout)
        finally:
            client.close()
            executor.shutdown(wait=False)


def forward_sns_event(
    event: SNSEvent,
    renderer: PayloadRenderer,
    config: ForwarderConfig | None = None,
    transport: httpx.BaseTransport | None = None,
) -> dict[str, Any]:
    """Forward the alarm carried by given SNS event and return the Lambda response."""
    logger.info("Received SNS event: %s", event.raw_event)

    try:
        forwarder = Forwarder(
            config or ForwarderConfig.from_environ(), renderer, transport
        )
        result = forwarder.forward(parse_alarm_event(event))
    except ForwarderError as e:
        logger.error("Failed to forward alarm to %s: %s", renderer.name, e)
        raise

    return result.as_response()
