"""Core domain layer: entities, ports, services and exceptions."""
