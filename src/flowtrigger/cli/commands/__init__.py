"""Subcommands of the flowtrigger CLI."""
