"""Data models for notexfr."""
