"""Typer sub-applications."""
