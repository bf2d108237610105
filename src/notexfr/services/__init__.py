"""Matching, synthesis and conversion services."""
