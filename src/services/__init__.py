"""Service layer: external metadata clients and the recommendation engine."""
