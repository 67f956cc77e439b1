"""Command line interface for changeset-py."""
