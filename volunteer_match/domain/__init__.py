"""Domain layer: entities, lifecycle rules and error taxonomy."""
