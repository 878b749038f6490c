"""Servicios por área de la API (barcode, etiquetas, estado, ubicaciones...)."""
