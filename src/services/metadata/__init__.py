"""External media metadata clients."""
