"""Configuration defaults for the tour engine."""
