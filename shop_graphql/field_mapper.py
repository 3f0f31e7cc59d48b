"""
Field Mapper — Populates a statically-known shape from a flat raw field map.

Shapes are pydantic models (see models.Shape); validation is delegated to a
TypeAdapter per shape. Mapping rules:
  - Unknown raw keys are ignored.
  - Absent and null raw keys leave the field at its default.
  - Keys listed in the shape's POLYMORPHIC_FIELDS are skipped; their
    concrete type depends on a discriminator and is decoded by the entity
    decoder.
  - A value that cannot be converted raises StructuralMappingFailed whose
    path is the pydantic error location ("sources[1].height").

The raw map is never modified.
"""

from functools import lru_cache
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import StructuralMappingFailed

T = TypeVar("T", bound=BaseModel)


@lru_cache(maxsize=None)
def _adapter(shape: type) -> TypeAdapter:
    return TypeAdapter(shape)


def attribute_for(shape: Type[BaseModel], key: str) -> str:
    """Return the model attribute populated from a raw key."""
    for name, info in shape.model_fields.items():
        if (info.alias or name) == key:
            return name
    raise TypeError(f"{shape.__name__} has no field for '{key}'")


def map_fields(fields: Dict[str, Any], shape: Type[T]) -> T:
    """Allocate a fresh instance of shape and populate it from fields.

    Args:
        fields: The raw field map (a parsed JSON object).
        shape: A pydantic model whose fields all have defaults.

    Returns:
        The populated instance.

    Raises:
        StructuralMappingFailed: If a present field cannot be converted.
    """
    if not (isinstance(shape, type) and issubclass(shape, BaseModel)):
        raise TypeError(f"{shape!r} is not a model shape")

    skipped = getattr(shape, "POLYMORPHIC_FIELDS", ())
    if skipped:
        fields = {key: value for key, value in fields.items() if key not in skipped}

    try:
        return _adapter(shape).validate_python(fields)
    except ValidationError as exc:
        raise _mapping_failure(exc, shape) from exc


def populate(instance: T, fields: Dict[str, Any]) -> T:
    """Populate an already-allocated shape instance in place and return it."""
    mapped = map_fields(fields, type(instance))
    for name in mapped.model_fields_set:
        setattr(instance, name, getattr(mapped, name))
    return instance


def _mapping_failure(exc: ValidationError, shape: type) -> StructuralMappingFailed:
    """Translate the first pydantic error into StructuralMappingFailed."""
    error = exc.errors()[0]
    path = [f"[{part}]" if isinstance(part, int) else str(part) for part in error["loc"]]
    return StructuralMappingFailed(f"cannot map {shape.__name__}: {error['msg']}", path)
