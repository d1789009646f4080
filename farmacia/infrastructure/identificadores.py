"""
Generador de identificadores derivados del reloj.

Usa los milisegundos de la hora actual; si dos llamadas caen en el mismo
milisegundo (o el reloj retrocede) se desempata con el último valor + 1,
de modo que la secuencia es estrictamente creciente dentro del proceso.
"""
import threading
import time

from farmacia.core.ports import IGeneradorId


class GeneradorIdReloj(IGeneradorId):

    def __init__(self, reloj_ms=None):
        self._reloj_ms = reloj_ms or (lambda: int(time.time() * 1000))
        self._ultimo = 0
        self._lock = threading.Lock()

    def siguiente(self) -> int:
        with self._lock:
            candidato = self._reloj_ms()
            if candidato <= self._ultimo:
                candidato = self._ultimo + 1
            self._ultimo = candidato
            return candidato
