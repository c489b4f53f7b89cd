"""Sentry integration for error tracking and monitoring.

Initializes Sentry SDK if SENTRY_DSN environment variable is set.
"""

import os
import re

import sentry_sdk


def before_send(event, hint):
    """Normalize error fingerprints for better grouping in Sentry.

    Groups errors that differ only in document ids, URLs or party ids.

    Args:
        event: Sentry event dict
        hint: Additional context about the event

    Returns:
        Modified event with custom fingerprint
    """
    message = None
    exc_type = None

    if "exception" in event and event["exception"]["values"]:
        exc_value = event["exception"]["values"][0]
        message = exc_value.get("value", "")
        exc_type = exc_value.get("type", "")
    elif "logentry" in event:
        message = event["logentry"].get("message", "")
    elif "message" in event:
        message = event["message"]

    if not message:
        return event

    # "HTTP error 404" / "HTTP error 503 for url: https://..." - group by status
    match = re.search(r"HTTP error (\d{3})", message)
    if match:
        event["fingerprint"] = ["fetch-failure", match.group(1)]

    # "Error fetching https://... after 3 attempts" - group by domain
    elif "Error fetching https://" in message:
        match = re.search(r"https://([^/]+)", message)
        domain = match.group(1) if match else "unknown-domain"
        event["fingerprint"] = ["fetch-error", domain]

    # "Error parsing vote: ..." - skipped vote blocks
    elif message.startswith("Error parsing vote"):
        event["fingerprint"] = ["vote-parse-skip"]

    # "Unknown party 1234"
    elif message.startswith("Unknown party"):
        event["fingerprint"] = ["unknown-party"]

    elif exc_type == "MalformedResponse":
        event["fingerprint"] = ["malformed-response"]

    return event


def init_sentry():
    """Initialize Sentry SDK if SENTRY_DSN is configured.

    Environment variables:
        SENTRY_DSN: Sentry Data Source Name (DSN) URL
        SENTRY_ENVIRONMENT: Environment name (default: production)
        SENTRY_TRACES_SAMPLE_RATE: Traces sample rate (default: 0.0)
    """
    sentry_dsn = os.getenv("SENTRY_DSN")

    if not sentry_dsn:
        return

    environment = os.getenv("SENTRY_ENVIRONMENT", "production")
    traces_sample_rate = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0"))

    sentry_sdk.init(
        dsn=sentry_dsn,
        environment=environment,
        traces_sample_rate=traces_sample_rate,
        before_send=before_send,
    )
