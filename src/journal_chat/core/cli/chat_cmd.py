"""journal-chat chat — terminal chat about your journal."""

from __future__ import annotations

import asyncio

import click


@click.command()
@click.option("--config", "config_file", type=click.Path(dir_okay=False), help="Path to a YAML or JSON config file.")
@click.option("--vault", type=click.Path(file_okay=False), help="Vault root directory (overrides config).")
@click.option("--journal", help="Journal folder inside the vault (overrides config).")
def chat(config_file: str | None, vault: str | None, journal: str | None) -> None:
    """Chat with a local model about your journal in the terminal."""
    from journal_chat.core.cli.common import create_session, load_config
    from journal_chat.gateway.cli_gateway import CliGateway

    config = load_config(config_file, vault=vault, journal=journal)
    session = create_session(config)
    gateway = CliGateway(session, config=config)

    click.echo(f"Starting journal chat with {session.model}...\n")
    asyncio.run(gateway.start())
