"""Domain core: entities, ports, services and exceptions."""
