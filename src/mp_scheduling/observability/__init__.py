"""Observability – structured logging and health checks for scheduled jobs."""
