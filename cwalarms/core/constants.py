from string import Template

# Alarm states
ALARM = "ALARM"
OK = "OK"
INSUFFICIENT_DATA = "INSUFFICIENT_DATA"

# Environment variable names
ENVIRONMENT = "ENVIRONMENT"
WEBHOOK_URL = "WEBHOOK_URL"
DELIVERY_TIMEOUT = "DELIVERY_TIMEOUT"

# Destinations
SLACK = "slack"
TEAMS = "teams"
DESTINATIONS = (SLACK, TEAMS)

ENVIRONMENTS = ("dev", "staging", "prod")

DEFAULT_REGION = "us-east-1"
DELIVERY_TIMEOUT_SECONDS = 10.0

CLOUDWATCH_CONSOLE_ALARM_URL_TEMPLATE = Template(
    "https://console.aws.amazon.com/cloudwatch/home?region=$region#alarmsV2:alarm/$alarm_name"
)
