"""Result Materializer — Converts raw hits into typed records.

Materialization is fail-fast for the whole batch: a single malformed hit
aborts the call, so a page never carries fewer items than the engine
reported for it.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ValidationError

from cinesift.adapters.base.adapter import Hit
from cinesift.exceptions import DeserializationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _keys_of(model: type[BaseModel], key: str) -> tuple[str, ...]:
    """Every payload key that populates the same model field as ``key``."""
    for name, field in model.model_fields.items():
        alias = field.validation_alias
        choices = alias.choices if isinstance(alias, AliasChoices) else [alias or field.alias]
        keys = {name, *(c for c in choices if isinstance(c, str))}
        if key in keys:
            return tuple(keys)
    return (key,)


class ResultMaterializer(Generic[ModelT]):
    """Deserializes hit payloads into instances of ``model``.

    Args:
        model: Pydantic model describing the target record shape.
        id_field: Payload key that receives ``Hit.id`` when the payload
            does not carry one. ``None`` leaves payloads untouched.
    """

    def __init__(self, model: type[ModelT], *, id_field: str | None = None) -> None:
        self.model = model
        self.id_field = id_field
        self._id_keys = _keys_of(model, id_field) if id_field else ()

    def materialize(self, hits: Sequence[Hit]) -> list[ModelT]:
        """Convert every hit, in order.

        Raises:
            DeserializationError: For the first hit whose payload does not
                conform to ``model``. No partial list is returned.
        """
        return [self.materialize_one(hit) for hit in hits]

    def materialize_one(self, hit: Hit) -> ModelT:
        try:
            data = self._decode(hit.payload)
            if self.id_field and not any(data.get(key) for key in self._id_keys):
                data[self.id_field] = hit.id
            return self.model.model_validate(data)
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning("Malformed payload for hit '%s': %s", hit.id, e)
            raise DeserializationError(hit.id, e) from e

    @staticmethod
    def _decode(payload: str | bytes | dict[str, Any]) -> dict[str, Any]:
        if isinstance(payload, (str, bytes)):
            decoded = json.loads(payload)
        else:
            decoded = payload
        # RedisJSON may wrap the root document in a one-element array
        if isinstance(decoded, list) and len(decoded) == 1:
            decoded = decoded[0]
        if not isinstance(decoded, dict):
            raise TypeError(f"expected a JSON object, got {type(decoded).__name__}")
        return dict(decoded)
