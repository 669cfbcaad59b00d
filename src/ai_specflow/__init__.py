"""ai-specflow: scaffold spec-driven development conventions into a project."""

__version__ = "0.3.0"
