"""Per-invocation state shared by every CLI command."""

from __future__ import annotations

import json
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import click
import structlog

from procure.domain.exceptions import DomainException
from procure.domain.repository.audit_recorder import AuditRecorder
from procure.domain.repository.unit_of_work import UnitOfWork
from procure.infrastructure import bootstrap
from procure.infrastructure.config import Settings

logger = structlog.get_logger(__name__)


@dataclass
class AppContext:

    settings: Settings
    actor: str | None

    def uow(self) -> UnitOfWork:
        return bootstrap.unit_of_work(self.settings)

    def audit(self) -> AuditRecorder:
        return bootstrap.audit_recorder(self.settings)


pass_app = click.make_pass_decorator(AppContext)


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn domain errors into user-facing messages.

    Anything unexpected is logged with its traceback and reported
    without internals.
    """
    try:
        yield
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except Exception:
        logger.exception("cli.unexpected_error")
        raise click.ClickException("Internal error; see the log for details")


def echo_json(payload: object) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))
