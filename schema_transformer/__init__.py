"""schema-transformer: MCP server that generates SQL transformation scripts."""

__version__ = "0.1.0"
