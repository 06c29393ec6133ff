"""Console output helpers shared by the CLI commands."""
