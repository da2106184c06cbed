"""
Application layer - use cases, DTOs, and the application container.

Use cases are the only entry point for API handlers.
"""
