"""Data models for the Kubik dashboard."""
