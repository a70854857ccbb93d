"""Adaptadores de I/O (HTTP, almacenamiento de sesión)."""
