"""Infrastructure adapters: persistence, authentication primitives and HTTP API."""
