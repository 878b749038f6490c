"""Adaptadores: transporte HTTP, caché, protocolos REST/SOAP y exportación."""
