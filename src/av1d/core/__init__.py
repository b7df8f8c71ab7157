"""Shared low-level helpers and the exception hierarchy."""
