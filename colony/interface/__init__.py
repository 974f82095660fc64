"""Command-line interface: command parsing and the interactive player."""
