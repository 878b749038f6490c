"""Núcleo del cliente: dominio, configuración, errores y servicios."""
