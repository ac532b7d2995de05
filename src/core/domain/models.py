"""Recursos concretos de la API (Pydantic v2).

Cada clase declara explícitamente su `resource_name` (segmento de ruta) y los
campos públicos que expone la API. Las claves desconocidas se ignoran, así que
la API puede añadir campos sin romper el parsing.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.api_model import ApiModel


class NamedLink(BaseModel):
    """Referencia ligera a otro recurso (p.ej. `origin`/`location` de un personaje)."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", description="Nombre del recurso enlazado.")
    url: str = Field(default="", description="URL del recurso enlazado (vacía si es desconocido).")


class PageInfo(BaseModel):
    """Bloque `info` de las respuestas paginadas."""

    model_config = ConfigDict(extra="ignore")

    count: int = Field(default=0, ge=0, description="Total de elementos que cumplen el filtro.")
    pages: int = Field(default=0, ge=0, description="Total de páginas.")
    next: str | None = Field(default=None, description="URL de la página siguiente.")
    prev: str | None = Field(default=None, description="URL de la página anterior.")


class Character(ApiModel[int]):
    """Personaje."""

    resource_name: ClassVar[str] = "character"
    summary_fields: ClassVar[tuple[str, ...]] = ("status", "species", "gender")

    name: str = Field(default="", description="Nombre del personaje.")
    status: str = Field(default="", description="'Alive', 'Dead' o 'unknown'.")
    species: str = Field(default="", description="Especie.")
    kind: str = Field(default="", alias="type", description="Subtipo/variante de la especie.")
    gender: str = Field(default="", description="'Female', 'Male', 'Genderless' o 'unknown'.")
    origin: NamedLink | None = Field(default=None, description="Ubicación de origen.")
    location: NamedLink | None = Field(default=None, description="Última ubicación conocida.")
    image: str = Field(default="", description="URL del avatar (300x300).")
    episode: list[str] = Field(default_factory=list, description="URLs de episodios en los que aparece.")
    url: str = Field(default="", description="URL canónica del recurso.")


class Location(ApiModel[int]):
    """Ubicación."""

    resource_name: ClassVar[str] = "location"
    summary_fields: ClassVar[tuple[str, ...]] = ("kind", "dimension")

    name: str = Field(default="", description="Nombre de la ubicación.")
    kind: str = Field(default="", alias="type", description="Tipo de ubicación (planeta, estación...).")
    dimension: str = Field(default="", description="Dimensión en la que se encuentra.")
    residents: list[str] = Field(default_factory=list, description="URLs de personajes residentes.")
    url: str = Field(default="", description="URL canónica del recurso.")


class Episode(ApiModel[int]):
    """Episodio."""

    resource_name: ClassVar[str] = "episode"
    summary_fields: ClassVar[tuple[str, ...]] = ("code", "air_date")

    name: str = Field(default="", description="Título del episodio.")
    air_date: str = Field(default="", description="Fecha de emisión tal como la devuelve la API.")
    code: str = Field(default="", alias="episode", description="Código del episodio (p.ej. 'S01E01').")
    characters: list[str] = Field(default_factory=list, description="URLs de personajes que aparecen.")
    url: str = Field(default="", description="URL canónica del recurso.")


RESOURCES: dict[str, type[ApiModel]] = {
    cls.resource_name: cls for cls in (Character, Location, Episode)
}


def resolve_resource(name: str) -> type[ApiModel]:
    """Devuelve la clase de recurso para `name` (case-insensitive)."""

    try:
        return RESOURCES[name.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(RESOURCES))
        raise KeyError(f"Unknown resource '{name}'. Known resources: {known}") from None
