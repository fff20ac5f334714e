"""Encoding of records written to the store."""

from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)


class Codec(Protocol[T]):
    """Encode/decode pair for one record type."""

    def encode(self, value: T) -> str: ...

    def decode(self, raw: Any) -> T: ...


class PydanticJsonCodec(Generic[ModelT]):
    """JSON codec for a pydantic model.

    Encodes with field aliases and without None fields. Decodes JSON text
    or bytes, and also already-parsed mappings, since some stores (and
    other writers of the same keys) hand values back as objects.
    """

    def __init__(self, model_cls: type[ModelT]):
        self.model_cls = model_cls

    def encode(self, value: ModelT) -> str:
        return value.model_dump_json(by_alias=True, exclude_none=True)

    def decode(self, raw: Any) -> ModelT:
        if isinstance(raw, (str, bytes, bytearray)):
            return self.model_cls.model_validate_json(raw)
        return self.model_cls.model_validate(raw)
