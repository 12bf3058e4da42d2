"""Core utilities and cross-cutting concerns."""
