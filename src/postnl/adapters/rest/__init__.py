"""Estrategia REST (JSON): builders y processors por área de la API."""
