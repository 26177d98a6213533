"""Data models for modgraph."""
