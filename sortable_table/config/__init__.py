"""Configuration loading (YAML validated against a bundled JSON schema)."""
