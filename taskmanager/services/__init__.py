"""Services package for the Task Manager API."""
