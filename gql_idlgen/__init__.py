"""Generate typed Python sources from GraphQL schema definitions."""

__version__ = "0.3.0"
