"""Data models for Focus Timer CLI."""
