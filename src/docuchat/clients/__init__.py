"""Clients for the remote summarization and chat services."""
