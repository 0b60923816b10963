"""Configuration — settings sources, config file lookup, and logging setup."""
