"""Shared infrastructure: configuration, logging and operation results."""
