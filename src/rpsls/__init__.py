"""Rock Paper Scissors Lizard Spock game server."""

__version__ = "0.1.0"
