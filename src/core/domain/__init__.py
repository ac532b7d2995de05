"""Modelos y entidades del dominio.

Aquí viven el modelo genérico de recursos (`ApiModel`), los recursos concretos
de la API y la taxonomía de errores. El dominio no conoce httpx ni la CLI:
solo describe peticiones y delega su ejecución en un `Executor`.
"""
