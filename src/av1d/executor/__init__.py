"""Encoding and file replacement."""
