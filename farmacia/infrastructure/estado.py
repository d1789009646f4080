# farmacia/infrastructure/estado.py
"""
Almacenes de estado por identidad (carritos, direcciones y reservas).

El estado es volátil: vive en la memoria del proceso o en el backend de caché
de Django configurado. El backend se elige con FARMACIA_ESTADO_BACKEND.
"""
import logging
from typing import Any, List

from django.conf import settings
from django.core.cache import caches

from farmacia.core.ports import IAlmacenEstado

logger = logging.getLogger(__name__)


class AlmacenEstadoMemoria(IAlmacenEstado):
    """Diccionario en memoria; dict conserva el orden de inserción de las claves."""

    def __init__(self, nombre: str = 'estado'):
        self.nombre = nombre
        self._datos = {}

    def obtener(self, clave: str, default: Any = None) -> Any:
        return self._datos.get(clave, default)

    def guardar(self, clave: str, valor: Any) -> None:
        self._datos[clave] = valor

    def eliminar(self, clave: str) -> None:
        self._datos.pop(clave, None)

    def claves(self) -> List[str]:
        return list(self._datos)

    def limpiar(self) -> None:
        self._datos.clear()


class AlmacenEstadoCache(IAlmacenEstado):
    """
    Almacén sobre el framework de caché de Django. Como la caché no permite
    enumerar claves, se mantiene una lista índice bajo una clave reservada.
    """
    INDICE = '__claves__'

    def __init__(self, nombre: str, alias: str = 'default'):
        self.nombre = nombre
        self.alias = alias

    @property
    def cache(self):
        return caches[self.alias]

    def _clave(self, clave: str) -> str:
        return f"farmacia:{self.nombre}:{clave}"

    def obtener(self, clave: str, default: Any = None) -> Any:
        return self.cache.get(self._clave(clave), default)

    def guardar(self, clave: str, valor: Any) -> None:
        self.cache.set(self._clave(clave), valor, timeout=None)
        indice = self.claves()
        if clave not in indice:
            indice.append(clave)
            self.cache.set(self._clave(self.INDICE), indice, timeout=None)

    def eliminar(self, clave: str) -> None:
        self.cache.delete(self._clave(clave))
        indice = [c for c in self.claves() if c != clave]
        self.cache.set(self._clave(self.INDICE), indice, timeout=None)

    def claves(self) -> List[str]:
        return list(self.cache.get(self._clave(self.INDICE), []))

    def limpiar(self) -> None:
        for clave in self.claves():
            self.cache.delete(self._clave(clave))
        self.cache.delete(self._clave(self.INDICE))


def crear_almacen(nombre: str) -> IAlmacenEstado:
    """Crea el almacén según la configuración (memoria por defecto)."""
    backend = getattr(settings, 'FARMACIA_ESTADO_BACKEND', 'memoria')
    if backend == 'cache':
        alias = getattr(settings, 'FARMACIA_ESTADO_CACHE_ALIAS', 'default')
        logger.info("Estado '%s' respaldado por la caché '%s'", nombre, alias)
        return AlmacenEstadoCache(nombre, alias=alias)
    if backend != 'memoria':
        logger.warning("Backend de estado desconocido '%s'; se usa memoria", backend)
    return AlmacenEstadoMemoria(nombre)
