from os import getenv

from aws_lambda_powertools import Logger


def get_logger() -> Logger:
    """Lambda logger shared by every module of an invocation."""
    return Logger(
        service=getenv("AWS_LAMBDA_FUNCTION_NAME", "cwalarms"),
        datefmt="%Y-%m-%dT%H:%M:%S.%f",
        use_datetime_directive=True,
        utc=True,
    )
