"""Infrastructure adapters (object stores, HTTP clients)."""
