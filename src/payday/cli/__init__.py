"""Command line interface for payday."""
