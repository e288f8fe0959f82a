"""Settings, logging/metrics and the outbound retry policy."""
