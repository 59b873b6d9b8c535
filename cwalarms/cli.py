from json import dumps, load

import click
from aws_lambda_powertools.utilities.data_classes import SNSEvent

from cwalarms.core import constants
from cwalarms.core.config import ForwarderConfig, get_environment_config
from cwalarms.core.exceptions import ForwarderError
from cwalarms.lambdas.forwarder.event import parse_alarm_event
from cwalarms.lambdas.forwarder.forwarder import Forwarder
from cwalarms.lambdas.forwarder.renderers import RENDERERS

destination = click.option(
    "--destination",
    "--d",
    help="Which webhook dialect to render for",
    type=click.Choice(constants.DESTINATIONS),
    required=True,
)
environment = click.option(
    "--environment",
    "--e",
    help="Which environment's settings to use",
    type=click.Choice(constants.ENVIRONMENTS),
    default="dev",
    show_default=True,
)
webhook_url = click.option(
    "--webhook-url",
    help="Webhook URL overriding the environment's configured one",
    required=False,
)
event_file = click.argument("event_file", type=click.File("r"))


def read_sns_event(event_file) -> SNSEvent:
    try:
        return SNSEvent(load(event_file))
    except ValueError as e:
        raise click.BadParameter(
            f"Not a JSON document: {e}", param_hint="EVENT_FILE"
        ) from e


@click.group()
def main() -> None:
    """Render and replay CloudWatch alarm notifications to chat webhooks."""


@main.command()
@destination
@environment
@event_file
def render(destination: str, environment: str, event_file) -> None:
    """Print the payload that would be posted for EVENT_FILE."""
    try:
        alarm_event = parse_alarm_event(read_sns_event(event_file))
    except ForwarderError as e:
        raise click.ClickException(str(e))

    payload = RENDERERS[destination]().render(alarm_event, environment)
    click.echo(dumps(payload, indent=2))


@main.command()
@destination
@environment
@webhook_url
@event_file
def forward(
    destination: str, environment: str, webhook_url: str | None, event_file
) -> None:
    """Deliver EVENT_FILE to the destination webhook once."""
    try:
        if webhook_url:
            config = ForwarderConfig(Environment=environment, WebhookUrl=webhook_url)
        else:
            config = get_environment_config(environment).forwarder_config(destination)
        alarm_event = parse_alarm_event(read_sns_event(event_file))
        result = Forwarder(config, RENDERERS[destination]()).forward(alarm_event)
    except (ForwarderError, ValueError) as e:
        raise click.ClickException(str(e))

    click.echo(result.body)


if __name__ == "__main__":
    main()
