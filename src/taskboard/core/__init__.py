"""Core domain logic: configuration, task storage and telemetry."""
