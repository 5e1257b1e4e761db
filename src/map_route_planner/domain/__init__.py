"""Domain layer - core business logic and models."""
