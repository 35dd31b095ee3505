"""Helpers shared by the chain stages"""

import logging
from typing import Any, Dict, Optional, Type, TypeVar

import httpx

from .errors import MinecraftAuthError


logger = logging.getLogger(__name__)

E = TypeVar("E", bound=MinecraftAuthError)

# Failures a stage converts into its own error: transport and HTTP status
# errors, undecodable JSON (ValueError), and bodies missing expected fields.
STAGE_FAILURES = (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError)


def error_payload(exc: BaseException) -> Optional[Dict[str, Any]]:
    """Decode the JSON body of a failed response, if there is one

    Args:
        exc: Exception raised while talking to an endpoint

    Returns:
        The decoded body when it is a JSON object, otherwise None
    """
    if not isinstance(exc, httpx.HTTPStatusError):
        return None
    try:
        data = exc.response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def status_of(exc: BaseException) -> Optional[int]:
    """HTTP status attached to an exception, if any"""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    return None


def describe_failure(exc: BaseException, message_field: str = "message") -> str:
    """Human readable reason for a stage failure

    Prefers the upstream message (``error_description`` for the Microsoft
    token endpoint, ``message`` elsewhere) and falls back to the exception text.

    Args:
        exc: Exception raised by the stage
        message_field: Key of the upstream error body holding the message

    Returns:
        Failure description
    """
    payload = error_payload(exc)
    if payload and payload.get(message_field):
        return str(payload[message_field])
    if isinstance(exc, (KeyError, IndexError, TypeError)):
        return f"Malformed response ({exc.__class__.__name__}: {exc})"
    return str(exc) or exc.__class__.__name__


def build_stage_error(
    error_cls: Type[E],
    prefix: str,
    exc: BaseException,
    message_field: str = "message",
) -> E:
    """Log a stage failure and build the typed error to raise for it

    Args:
        error_cls: MinecraftAuthError subclass for the stage
        prefix: Message prefix naming the stage
        exc: Underlying exception
        message_field: Key of the upstream error body holding the message

    Returns:
        Error instance ready to be raised ``from exc``
    """
    payload = error_payload(exc)
    reason = describe_failure(exc, message_field)
    logger.error(f"{prefix}: {payload if payload is not None else reason}")
    return error_cls(f"{prefix}: {reason}", status_code=status_of(exc), detail=payload)
