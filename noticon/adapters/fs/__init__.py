"""Filesystem adapters and path helpers."""
