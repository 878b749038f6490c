"""Modelos y entidades del dominio PostNL.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2) y su esquema de cable.
- El dominio no conoce HTTP, CLI ni SOAP: solo conceptos del problema.
"""
