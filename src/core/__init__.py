"""Paquete raíz del Core: configuración, dominio, contratos y servicios."""
