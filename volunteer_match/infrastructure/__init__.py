"""Infrastructure adapters: persistence, realtime delivery and token verification."""
