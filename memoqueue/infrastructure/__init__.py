"""Infrastructure layer: entry storage and logging adapters."""
