"""Include graph recorded while loading."""
