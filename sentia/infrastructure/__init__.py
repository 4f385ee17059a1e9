"""Infrastructure adapters: HTTP transport, persistence, logging."""
