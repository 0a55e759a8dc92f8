"""Modelos y entidades del dominio.

Estructuras de datos puras (Pydantic v2) que reflejan el JSON de los
servicios Assistant y Speech to Text. El dominio no conoce HTTP ni la CLI.
"""
