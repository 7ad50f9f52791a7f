"""Domain layer: token records, identifier registry and the review pipeline."""
