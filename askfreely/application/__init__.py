"""Application layer: DTOs, ports, validators and use cases."""
