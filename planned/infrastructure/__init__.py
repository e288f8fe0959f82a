"""Infrastructure adapters (database, HTTP clients, encryption)."""
