"""Application layer: ports consumed by the provider."""
