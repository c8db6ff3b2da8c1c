"""Infrastructure layer: storage and external service clients."""
