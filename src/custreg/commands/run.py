"""Command: replay a JSON-lines request script against a fresh registry."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
import structlog

from custreg.commands._base import RegCommand

if TYPE_CHECKING:
    from custreg.commands._context import AppContext
    from custreg.domain.customer import Customer
    from custreg.services.result import ServiceResult


def _load_seed(path: Path) -> list[Customer]:
    """Read a JSON array of customer records.

    Every record must decode and pass the same field rules as a stored
    customer; the first offending record aborts the run.
    """
    from custreg.domain.validation import Validator
    from custreg.transport.codec import DecodeError, decode_customer

    validator = Validator()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in seed file {path}: {exc}"
        raise click.ClickException(msg) from exc
    if not isinstance(raw, list):
        raise click.ClickException(f"Seed file {path} must contain a JSON array")
    customers = []
    for index, item in enumerate(raw):
        try:
            customer = decode_customer(item)
        except DecodeError as exc:
            msg = f"Seed record {index} in {path} is malformed: {exc}"
            raise click.ClickException(msg) from exc
        vr = validator.validate(customer, root=f"seed[{index}]")
        if not vr.valid:
            msg = f"Seed record {index} in {path} is invalid: " + "; ".join(vr.errors)
            raise click.ClickException(msg)
        customers.append(customer)
    return customers


def _parse_line(line: str) -> dict[str, Any] | ServiceResult:
    from custreg.domain.validation import FieldViolation
    from custreg.transport.handler import decode_failure

    try:
        request = json.loads(line)
    except json.JSONDecodeError as exc:
        violation = FieldViolation("request", "json", f"request: {exc.msg}")
        return decode_failure("unknown", [violation])
    if not isinstance(request, dict):
        violation = FieldViolation("request", "object", "request must be a JSON object")
        return decode_failure("unknown", [violation])
    return request


@click.command(
    cls=RegCommand,
    examples="""\
  custreg run requests.jsonl
  custreg --json run requests.jsonl --seed customers.json
  custreg run requests.jsonl --timeout 0.5""",
)
@click.argument("script", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--seed",
    "seed_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON array of customer records to preload.",
)
@click.option("--timeout", type=float, default=None, help="Per-request deadline in seconds.")
@click.pass_obj
def run(app: AppContext, script: Path, seed_path: Path | None, timeout: float | None) -> None:
    """Run each request line of SCRIPT and print every response.

    Blank lines and lines starting with '#' are skipped.  Exits 1 when
    any request failed.
    """
    from custreg.infrastructure.context import CallContext
    from custreg.transport.handler import RequestHandler

    seed = _load_seed(seed_path) if seed_path else None
    handler = RequestHandler(app.build_service(seed))

    total = failed = 0
    for lineno, raw in enumerate(script.read_text(encoding="utf-8").splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        total += 1
        parsed = _parse_line(line)
        if isinstance(parsed, dict):
            ctx = CallContext(timeout=timeout) if timeout is not None else None
            with structlog.contextvars.bound_contextvars(script=script.name, line=lineno):
                result = handler.dispatch(parsed, ctx)
        else:
            result = parsed
        if not result.ok:
            failed += 1
        if app.settings.json_output:
            from custreg.transport.codec import encode_result

            click.echo(json.dumps(encode_result(result), ensure_ascii=False))
        else:
            click.echo(app.render(result))

    if failed:
        click.echo(f"{failed} of {total} requests failed", err=True)
        raise SystemExit(1)
