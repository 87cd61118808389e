"""Infrastructure layer: network access, on-disk cache and the location repository."""
