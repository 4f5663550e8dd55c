"""CLI package for interacting with the power analytics service."""
