"""Subcommands of the statefold CLI."""
