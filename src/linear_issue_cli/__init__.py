"""Command-line client for listing and creating Linear issues."""

__version__ = "0.1.0"
