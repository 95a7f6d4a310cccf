"""Data models and sample sources."""
