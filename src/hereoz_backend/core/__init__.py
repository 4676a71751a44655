"""Core infrastructure: configuration, database, logging and error handling."""
