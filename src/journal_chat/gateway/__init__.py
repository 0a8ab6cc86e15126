"""Gateway framework — front-ends that relay user input to a journal chat session."""

from .base import BotGateway
from .cli_gateway import CliGateway

__all__ = ["BotGateway", "CliGateway"]
