"""Command-line interface for the chambers routing service."""
