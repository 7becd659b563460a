"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    BOOTSTRAP_SCRIPT,
    DEFAULT_CSS,
    DEFAULT_POLL_INTERVAL_MS,
    EVENT_SET_CSS,
    EVENT_SET_HTML,
    HTML_TEMPLATE,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "BOOTSTRAP_SCRIPT",
    "DEFAULT_CSS",
    "DEFAULT_POLL_INTERVAL_MS",
    "EVENT_SET_HTML",
    "EVENT_SET_CSS",
    "HTML_TEMPLATE",
]
