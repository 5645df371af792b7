"""Data models for sprout."""
