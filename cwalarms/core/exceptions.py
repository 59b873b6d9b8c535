class ForwarderError(Exception):
    pass


class MalformedEventError(ForwarderError):
    pass


class ConfigurationError(ForwarderError):
    pass


class DeliveryError(ForwarderError):
    def __init__(self, message: str, destination: str = "") -> None:
        super().__init__(message)
        self.destination = destination


class DestinationError(DeliveryError):
    """Destination answered with anything other than HTTP 200."""

    def __init__(self, destination: str, status_code: int, body: str) -> None:
        super().__init__(
            f"{destination} API error: {status_code} - {body}", destination
        )
        self.status_code = status_code
        self.body = body


class TransportFailure(DeliveryError):
    """No response was received from the destination (DNS, connection, timeout)."""
