"""Constants, error taxonomy, configuration, and version helpers."""
