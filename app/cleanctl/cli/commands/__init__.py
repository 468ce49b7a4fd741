"""CLI subcommands for cleanctl."""
