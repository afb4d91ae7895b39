"""Rewind command-line interface package."""
