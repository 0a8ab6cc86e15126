"""Journal Chat CLI — entry point for the chat and context commands."""

import click

from journal_chat import __version__


@click.group()
@click.version_option(version=__version__, package_name="journal-chat")
def main() -> None:
    """Journal Chat — explore your journal with a local AI."""


# Register subcommands (lazy imports keep startup fast)
from .chat_cmd import chat
from .context_cmd import context

main.add_command(chat)
main.add_command(context)
