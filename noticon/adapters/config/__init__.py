"""Configuration storage adapters."""
