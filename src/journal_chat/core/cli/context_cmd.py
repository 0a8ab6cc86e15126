"""journal-chat context — print the journal text gathered for a date range."""

from __future__ import annotations

import asyncio
import sys

import click


@click.command()
@click.argument("date_range", nargs=-1, required=True)
@click.option("--config", "config_file", type=click.Path(dir_okay=False), help="Path to a YAML or JSON config file.")
@click.option("--vault", type=click.Path(file_okay=False), help="Vault root directory (overrides config).")
@click.option("--journal", help="Journal folder inside the vault (overrides config).")
def context(date_range: tuple[str, ...], config_file: str | None, vault: str | None, journal: str | None) -> None:
    """Show the journal entries for DATE_RANGE, e.g. '1 jan 2023 to 31 jan 2023'."""
    from journal_chat.core.cli.common import create_store, load_config
    from journal_chat.core.exceptions import JournalStoreError
    from journal_chat.journal.config import JournalConfig
    from journal_chat.journal.context import get_journal_context

    config = load_config(config_file, vault=vault, journal=journal)
    store = create_store(config)
    text = " ".join(date_range)

    try:
        result = asyncio.run(get_journal_context(store, JournalConfig.from_config(config), text))
    except JournalStoreError as e:
        click.echo(f"Could not read your journal folder: {e}", err=True)
        sys.exit(1)

    if result is None:
        click.echo(f"No valid date range found in '{text}'.", err=True)
        sys.exit(1)

    click.echo(f"Journals from {result.start_date} to {result.end_date}: {len(result.included)} entries", err=True)
    click.echo(result.combined_text, nl=False)
