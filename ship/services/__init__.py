"""Release services: package publishing and container images."""
