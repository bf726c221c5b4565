"""Core: configuración, dominio e interfaces (sin I/O)."""
