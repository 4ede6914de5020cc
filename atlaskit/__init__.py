"""Building blocks for API services: query operators, resource identifiers, call metadata, request IDs, request info and logging."""

__version__ = "2.0.0"