"""Infrastructure layer - configuration, logging and adapters."""
