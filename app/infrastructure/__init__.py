"""Infrastructure adapters: persistence, cache, security."""
