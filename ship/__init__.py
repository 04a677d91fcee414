"""Release tooling: version bumps, package publishing and container images."""

__version__ = "0.3.0"
