"""Contratos (Protocol) que el Core espera de sus dependencias externas.

Hoy solo la fuente de credenciales: el cliente HTTP la recibe inyectada y
nunca sabe si detrás hay memoria, un archivo o el almacenamiento de un navegador.
"""
