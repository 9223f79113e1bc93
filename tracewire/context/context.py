"""Helpers for tracking the active live span context - stored in the OpenTelemetry context."""

from contextvars import Token
from typing import Any, Optional

from opentelemetry import context as context_api

_SPAN_CONTEXT_KEY = context_api.create_key("tracewire-span-context")


def get_span_context() -> Optional[Any]:
    """
    Return the live span context of the current execution context, if any.

    The returned object belongs to the span lifecycle layer; it exposes a
    `parent` link and a `contained_span_builders` collection.
    """
    return context_api.get_value(_SPAN_CONTEXT_KEY)


def set_span_context(span_context: Any) -> Token:
    """
    Make a live span context current.

    Returns:
        Token needed to restore the previous state
    """
    ctx = context_api.set_value(_SPAN_CONTEXT_KEY, span_context)
    return context_api.attach(ctx)


def unset_span_context(token: Token) -> None:
    """
    Restore the previous span context using the provided token.

    Args:
        token: Token returned by set_span_context()
    """
    context_api.detach(token)
