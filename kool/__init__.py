"""Docker-compose wrapping, dependency checks, tarballs and a cloud deploy API client."""

__version__ = "0.1.0"