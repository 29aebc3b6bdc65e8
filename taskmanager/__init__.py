"""Task Manager: a small task-tracking JSON API with a session login gate."""

__version__ = "2.0.0"
