"""Database access: engine, table models and repository implementations."""
