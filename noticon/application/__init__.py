"""Use cases and adapter factories."""
