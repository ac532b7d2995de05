"""Contratos del Core.

Aquí vive el `Executor` que consume `ApiModel`: el dominio describe la
petición (método, ruta, filtros) y el adaptador httpx la ejecuta.
"""
