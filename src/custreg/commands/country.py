"""Command: look up an ISO 3166-1 country."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from custreg.commands._base import RegCommand

if TYPE_CHECKING:
    from custreg.commands._context import AppContext


@click.command(
    cls=RegCommand,
    examples="""\
  custreg country FI
  custreg country FIN
  custreg country 246
  custreg country 'united states of america'""",
)
@click.argument("query")
@click.pass_obj
def country(app: AppContext, query: str) -> None:
    """Resolve QUERY as an alpha-2, alpha-3, numeric code, or country name."""
    from custreg.domain.countries import lookup
    from custreg.services.result import ErrorCode, ServiceError, ServiceResult

    found = lookup(query)
    if found is None:
        result = ServiceResult(
            ok=False,
            op="country",
            error=ServiceError(
                code=ErrorCode.NOT_FOUND,
                message=f"No country matches: {query}",
                detail={"query": query},
            ),
        )
    else:
        result = ServiceResult(ok=True, op="country", data=found._asdict())
    app.emit(result)
