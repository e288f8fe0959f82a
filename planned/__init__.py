"""planned. - resource planning with Asana and TimeTac synchronization."""

__version__ = "0.1.0"
