"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2) y el codec de labels.
- El dominio no conoce HTTP ni CLI: solo silences, matchers y firmas.
"""
