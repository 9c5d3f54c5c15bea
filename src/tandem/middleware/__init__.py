"""ASGI middleware wrapping any tandem handler."""
