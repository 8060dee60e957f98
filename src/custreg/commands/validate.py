"""Command: validate a customer-info document without storing it."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from custreg.commands._base import RegCommand

if TYPE_CHECKING:
    from custreg.commands._context import AppContext


@click.command(
    cls=RegCommand,
    examples="""\
  custreg validate person.json
  custreg --json validate organization.json""",
)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def validate(app: AppContext, path: Path) -> None:
    """Check a PersonInfo/OrganizationInfo JSON file and list every violation."""
    from custreg.domain.validation import FieldViolation
    from custreg.transport.codec import DecodeError, decode_info
    from custreg.transport.handler import decode_failure

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        violation = FieldViolation("document", "json", f"document: {exc.msg} (line {exc.lineno})")
        app.emit(decode_failure("validate", [violation]))
        return

    try:
        info = decode_info(payload)
    except DecodeError as exc:
        app.emit(decode_failure("validate", exc.violations))
        return

    app.emit(app.service.validate_info(info))
