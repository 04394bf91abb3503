"""noticon - resolve notification icons into size-bounded cairo surfaces."""

__version__ = "1.0.0"
