"""Service registry and composition root."""
