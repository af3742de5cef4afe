"""Application layer: entity services, list query building, relationship sync."""
