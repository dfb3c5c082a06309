"""Domain rules for content keys, normalization, caching and snapshots."""
