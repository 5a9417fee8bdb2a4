"""Structured logging configuration for the application."""

import logging
import sys

import boto3
import watchtower
from pythonjsonlogger.json import JsonFormatter


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter that stamps every record with service context."""

    def __init__(self, *args, environment="development", service="pulse-demo",
                 **kwargs):
        super().__init__(*args, **kwargs)
        self.environment = environment
        self.service = service

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log records."""
        super().add_fields(log_record, record, message_dict)

        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["timestamp"] = self.formatTime(record, self.datefmt)

        log_record["environment"] = self.environment
        log_record["service"] = self.service


def build_formatter(config):
    return CustomJsonFormatter(
        fmt="%(timestamp)s %(level)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        environment=config.get("APP_ENV", "development"),
        service=config.get("SERVICE_NAME", "pulse-demo"),
    )


def setup_logging(app):
    """
    Configure structured JSON logging on the root logger.

    Args:
        app: Flask application instance

    Returns:
        Logger instance
    """
    log_level = app.config.get("LOG_LEVEL", "INFO").upper()

    logger = logging.getLogger()
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        if getattr(handler, "_pulse_managed", False):
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(build_formatter(app.config))
    console_handler._pulse_managed = True

    logger.addHandler(console_handler)

    # Flask's own logger propagates to the root handlers configured above.
    app.logger.handlers = []
    app.logger.setLevel(log_level)
    app.logger.propagate = True

    configure_cloudwatch_logging(app)

    return logger


def configure_cloudwatch_logging(app):
    """
    Attach an AWS CloudWatch Logs handler to the root logger so that
    ERROR-level (and above) logs, simulated failures included, are shipped
    to CloudWatch.

    Controlled by the CLOUDWATCH_ENABLED config flag. When disabled no AWS
    calls are made, keeping local dev simple.

    :param app: Flask application instance
    :return: None
    """
    if not app.config.get("CLOUDWATCH_ENABLED"):
        app.logger.debug("CloudWatch logging is disabled")
        return None

    region = app.config.get("AWS_REGION", "us-east-1")
    log_group = app.config.get("CLOUDWATCH_LOG_GROUP", "pulse-demo")
    log_stream = app.config.get("CLOUDWATCH_LOG_STREAM", "error-logs")
    log_level_name = app.config.get("CLOUDWATCH_LOG_LEVEL", "ERROR")
    log_level = getattr(logging, log_level_name.upper(), logging.ERROR)

    boto3_client = boto3.client("logs", region_name=region)

    cw_handler = watchtower.CloudWatchLogHandler(
        log_group_name=log_group,
        log_stream_name=log_stream,
        boto3_client=boto3_client,
        send_interval=10,
        create_log_group=True,
        create_log_stream=True,
    )
    cw_handler.setLevel(log_level)
    cw_handler.setFormatter(build_formatter(app.config))
    cw_handler._pulse_managed = True

    logging.getLogger().addHandler(cw_handler)

    app.logger.info(
        "CloudWatch logging enabled",
        extra={
            "log_group": log_group,
            "log_stream": log_stream,
            "log_level": log_level_name,
        },
    )
    return None
