"""Domain layer: entities, ports and services of the identity core."""
