"""Base de los servicios por área.

Por qué una estrategia:
- Cada servicio habla REST o SOAP. El par (builder, processor) del modo
  activo se guarda como una sola tupla y `set_api_mode` la sustituye entera;
  una operación lee la tupla una vez, así que nunca mezcla builder de un
  protocolo con processor del otro.

Caché:
- Las lecturas sueltas consultan la caché por id de correlación y guardan
  la respuesta si fue 2xx y se pudo procesar.
- Las operaciones que modifican (barcode, etiqueta, confirmación) no se cachean.
- En lotes, el resultado de cada id es su valor o su `PostNLError`; con
  `strict=True` el primer error aborta.
- Un lote es una lista (clave = `id` de cada petición) o un mapping
  `{id: petición}`; dos peticiones con el mismo id son un error.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Mapping, Sequence, TypeVar, Union

import httpx

from postnl.adapters.response_cache import dump_response, load_response
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.requests import RequestEntity
from postnl.core.errors import InvalidArgumentError, NotSupportedError, PostNLError
from postnl.core.interfaces.cache import ResponseCache
from postnl.core.interfaces.transport import HttpClient
from postnl.core.services.batch import dispatch_batch

logger = logging.getLogger(__name__)

R = TypeVar("R")
E = TypeVar("E", bound=RequestEntity)

# Lista de peticiones (clave = id de cada una) o mapping `{id: petición}`.
Batch = Union[Sequence[E], Mapping[str, E]]

Strategy = tuple[Any, Any]


def keyed_batch(entities: Batch[E]) -> dict[str, E]:
    """`{id: petición}` en el orden de entrada.

    Con un mapping, la clave pasa a ser el id de correlación de su petición.
    Un id repetido lanza `InvalidArgumentError` antes de cualquier envío.
    """

    if isinstance(entities, Mapping):
        return {
            key: entity if entity.id == key else entity.model_copy(update={"id": key})
            for key, entity in entities.items()
        }

    keyed: dict[str, E] = {}
    for entity in entities:
        if entity.id in keyed:
            raise InvalidArgumentError(f"Duplicate request id {entity.id!r} in batch")
        keyed[entity.id] = entity
    return keyed


class UnsupportedStrategy:
    """Ocupa el lugar de builder/processor en un modo sin soporte."""

    def __init__(self, area: str, mode: ApiMode) -> None:
        self.area = area
        self.mode = mode

    def __getattr__(self, name: str) -> Callable[..., Any]:
        def unsupported(*args: Any, **kwargs: Any) -> Any:
            raise NotSupportedError(f"{self.area} is not available in {self.mode.label()} mode")

        return unsupported


class BaseService:
    AREA: ClassVar[str] = ""
    DEFAULT_VERSION: ClassVar[str] = ""
    # {modo: (clase builder, clase processor)}
    STRATEGIES: ClassVar[dict[ApiMode, tuple[type, type]]] = {}

    def __init__(
        self,
        *,
        api_key: str,
        sandbox: bool,
        http_client: HttpClient,
        api_mode: ApiMode = ApiMode.REST,
        cache: ResponseCache | None = None,
        version: str | None = None,
    ) -> None:
        self.api_key = api_key
        self.sandbox = sandbox
        self.http_client = http_client
        self.cache = cache
        self.version = version or self.DEFAULT_VERSION
        self.api_mode = api_mode
        self._strategy: Strategy = self._build_strategy(api_mode)

    def _build_strategy(self, mode: ApiMode) -> Strategy:
        classes = self.STRATEGIES.get(mode)
        if classes is None:
            unsupported = UnsupportedStrategy(self.AREA, mode)
            return unsupported, unsupported
        builder_cls, processor_cls = classes
        builder = builder_cls(api_key=self.api_key, sandbox=self.sandbox, version=self.version)
        return builder, processor_cls()

    def set_api_mode(self, mode: ApiMode) -> None:
        strategy = self._build_strategy(mode)
        self._strategy = strategy
        self.api_mode = mode

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    # --- envío -------------------------------------------------------------

    def _cached_response(self, key: str) -> httpx.Response | None:
        if self.cache is None:
            return None
        response = load_response(self.cache.get(key))
        if response is not None:
            logger.debug("[%s] %s cache hit", key, self.AREA)
        return response

    def _send(
        self,
        entity: RequestEntity,
        build: Callable[[], httpx.Request],
        process: Callable[[httpx.Response], R],
        *,
        cacheable: bool = True,
    ) -> R:
        """Una petición: caché -> transporte -> processor -> caché."""

        use_cache = cacheable and self.cache is not None
        response = self._cached_response(entity.id) if use_cache else None
        fresh = response is None
        if response is None:
            response = self.http_client.execute(build())

        result = process(response)
        if use_cache and fresh and response.is_success:
            self.cache.set(entity.id, dump_response(response))
        return result

    def _send_many(
        self,
        entities: Batch[E],
        build: Callable[[E], httpx.Request],
        process: Callable[[httpx.Response], R],
        *,
        cacheable: bool = True,
        strict: bool = False,
    ) -> dict[str, R | PostNLError]:
        """Un lote: `{id: resultado | PostNLError}` en el orden de entrada."""

        requests = {key: build(entity) for key, entity in keyed_batch(entities).items()}
        outcomes = dispatch_batch(
            requests,
            http_client=self.http_client,
            cache=self.cache if cacheable else None,
        )

        results: dict[str, R | PostNLError] = {}
        for key, outcome in outcomes.items():
            if isinstance(outcome, PostNLError):
                if strict:
                    raise outcome
                results[key] = outcome
                continue
            try:
                results[key] = process(outcome)
            except PostNLError as exc:
                if strict:
                    raise
                logger.warning("[%s] %s failed: %s", key, self.AREA, exc)
                results[key] = exc
        return results
