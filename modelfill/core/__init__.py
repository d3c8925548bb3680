"""Core building blocks: models, errors, introspection and random values."""
