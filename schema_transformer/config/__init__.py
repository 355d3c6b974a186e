"""Configuration for schema-transformer."""
