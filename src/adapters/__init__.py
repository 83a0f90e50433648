"""Adaptadores de I/O (HTTP) hacia Alertmanager."""
