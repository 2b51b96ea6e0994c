"""Helpers shared by CLI commands: caller session and error mapping."""

from __future__ import annotations

import click

from printops.domain.exceptions import (
    BatchValidationError,
    DomainException,
    ValidationError,
)
from printops.domain.model.session import Session
from printops.infrastructure.bootstrap import user_repository


def current_session() -> Session:
    """Build the caller's Session from the ``--as-user`` group option."""
    ctx = click.get_current_context()
    user_id = (ctx.find_root().obj or {}).get("as_user")
    if not user_id:
        raise click.UsageError("Specify the acting user with --as-user or PRINTOPS_USER.")
    user = user_repository().get_by_id(user_id)
    if user is None:
        raise click.ClickException(f"Unknown user '{user_id}'")
    return Session.for_user(user)


def fail(exc: DomainException) -> click.ClickException:
    """Translate a domain error into a ClickException with its details."""
    message = str(exc)
    if isinstance(exc, BatchValidationError):
        message += "\nDeselect these orders and submit again."
    elif isinstance(exc, ValidationError) and exc.fields:
        message += f" [{', '.join(exc.fields)}]"
    return click.ClickException(message)
