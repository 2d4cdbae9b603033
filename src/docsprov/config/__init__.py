"""Configuration: models, settings merge, discovery, and logging."""
