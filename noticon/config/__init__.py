"""Configuration dataclasses and loading."""
