"""Configuration: environment adapter and exporter settings."""
