"""CLI subcommands for modorder."""
