"""Repository layer - data access abstraction."""
