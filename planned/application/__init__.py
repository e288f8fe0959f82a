"""Application layer: use cases, application services and ports."""
