"""Command implementations for the squeeze CLI."""
