"""CLI helpers for resolving bill and debt references."""

from __future__ import annotations

from typing import Sequence

import click

from payday.cli.error_handling import handle_domain_error
from payday.domain.errors import DomainError
from payday.utils.resolver import Named, resolve_index


def resolve_index_or_exit(
    ctx: click.Context, items: Sequence[Named], reference: str, kind: str
) -> int:
    """Resolve a name or number to a list index, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_index(items, reference, kind)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
