from typing import Any

from aws_lambda_powertools.utilities.data_classes import SNSEvent, event_source
from aws_lambda_powertools.utilities.typing import LambdaContext

from cwalarms.lambdas.forwarder.forwarder import forward_sns_event
from cwalarms.lambdas.forwarder.renderers import TeamsRenderer


@event_source(data_class=SNSEvent)
def lambda_handler(event: SNSEvent, context: LambdaContext) -> dict[str, Any]:
    """Teams Forwarder Lambda Handler for CloudWatch alarm SNS notifications."""
    return forward_sns_event(event, TeamsRenderer())
