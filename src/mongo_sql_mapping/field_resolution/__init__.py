"""Field resolution exports."""

from .field_resolver import (
    DuplicateFieldError,
    FieldResolver,
    TypeMismatchError,
    UnresolvedFieldError,
    is_identifier_path,
    primary_key_checker,
    resolve_fields,
)
from .mapping_models import MappingField

__all__ = [
    "DuplicateFieldError",
    "FieldResolver",
    "MappingField",
    "TypeMismatchError",
    "UnresolvedFieldError",
    "is_identifier_path",
    "primary_key_checker",
    "resolve_fields",
]
