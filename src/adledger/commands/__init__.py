"""Subcommand modules for adledger.

Provides register_commands() which uses deferred imports to keep
``adledger --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from adledger.commands.ads import create, delete, list_ads, show, update
    from adledger.commands.bid import bid

    cli.add_command(create)
    cli.add_command(update)
    cli.add_command(delete)
    cli.add_command(show)
    cli.add_command(list_ads)
    cli.add_command(bid)
