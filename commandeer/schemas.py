"""
Schema capability consumed by the argument pipeline.

The pipeline never looks inside a validation library. Everything it needs from a
schema is expressed by the small Schema interface below:

- fields: ordered mapping of canonical name → FieldSpec(name, array, default, descr)
  • array: whether the accepted shape is a sequence once Optional/Annotated/default
    layers are peeled away (drives the array normalizer).
  • default: the declared default, or Unset when the field declares none (drives help).
  • descr: human-readable description (drives help).
- validate(value) → Validation(value, issues)
  • never raises for invalid input; failures come back as Issue(path, reason) tuples
    so the pipeline can report one uniform fault kind.

Backends
- ModelSchema: pydantic BaseModel subclasses (option schemas).
- TypeSchema: any type understood by pydantic.TypeAdapter (positional schemas,
  e.g. tuple[str, int] or list[Path]).
- adapt(): pick the right backend for a model, a type, or pass a Schema through.
"""
import collections.abc
import functools
import logging
import types
import typing
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import NamedTuple, Annotated, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

from .utils import Unset

logger = logging.getLogger(__name__)

# Origins whose values are sequences of items as far as the command line is concerned
_ARRAYS = frozenset({
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
})


class FieldSpec(NamedTuple):
    name: str
    array: bool = False
    default: typing.Any = Unset
    descr: str | None = None


class Issue(NamedTuple):
    path: str
    reason: str

    def __str__(self):
        return f"{self.path}: {self.reason}"


class Validation(NamedTuple):
    """
    Tagged result of a validation: the coerced value on success, the issues otherwise.
    """
    value: typing.Any = None
    issues: tuple[Issue, ...] = ()

    @property
    def ok(self):
        return not self.issues


def _unwrap(annotation):
    """
    peel Annotated[...] and Optional[...] layers down to the underlying shape.

    unions with more than one non-None member are left as they are: their shape is
    ambiguous, so they are not treated as arrays.
    """
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation = get_args(annotation)[0]
        elif origin is Union or origin is types.UnionType:
            members = [member for member in get_args(annotation) if member is not type(None)]
            if len(members) != 1:
                return annotation
            annotation = members[0]
        else:
            return annotation


def isarray(annotation, /):
    """
    whether a field annotation accepts a sequence of items (list[str], tuple[int, ...],
    Optional[list[str]], Annotated[set[str], ...], bare list).
    """
    annotation = _unwrap(annotation)
    return (get_origin(annotation) or annotation) in _ARRAYS


def _issues(error):
    return tuple(
        Issue(".".join(map(str, detail["loc"])), detail["msg"])
        for detail in error.errors()
    )


class Schema(ABC):
    """
    minimal capability interface any validation backend implements.
    """

    @property
    @abstractmethod
    def fields(self):
        """ordered, read-only mapping of canonical field name → FieldSpec."""

    @abstractmethod
    def validate(self, value, /):
        """coerce/validate value and return a Validation (never raises for bad input)."""

    def __contains__(self, name):
        return name in self.fields

    def __iter__(self):
        return iter(self.fields)


class ModelSchema(Schema):
    """
    Schema backed by a pydantic model; each model field is one option.
    """

    def __init__(self, model, /):
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise TypeError("ModelSchema() argument must be a pydantic model class")
        self.model = model

    @functools.cached_property
    def fields(self):
        fields = {}
        for name, info in self.model.model_fields.items():
            default = Unset if info.is_required() else info.get_default(call_default_factory=True)
            fields[name] = FieldSpec(name, isarray(info.annotation), default, info.description)
        return MappingProxyType(fields)

    def validate(self, value, /):
        try:
            return Validation(self.model.model_validate(value))
        except ValidationError as error:
            logger.debug("model %s rejected %r", self.model.__name__, value)
            return Validation(issues=_issues(error))

    def __repr__(self):
        return f"ModelSchema({self.model.__name__})"


class TypeSchema(Schema):
    """
    Schema backed by pydantic.TypeAdapter; used for positional argument schemas.
    """

    def __init__(self, type, /):
        self.type = type
        self.adapter = TypeAdapter(type)

    @property
    def fields(self):
        return MappingProxyType({})

    def validate(self, value, /):
        try:
            return Validation(self.adapter.validate_python(value))
        except ValidationError as error:
            logger.debug("type %r rejected %r", self.type, value)
            return Validation(issues=_issues(error))

    def __repr__(self):
        return f"TypeSchema({self.type!r})"


def adapt(object, /):
    """
    return a Schema for a pydantic model, any other type/annotation, or a Schema.

    - Schema instances are returned unchanged.
    - pydantic model classes become ModelSchema.
    - anything else is handed to TypeSchema (TypeAdapter raises for unsupported input).
    """
    if isinstance(object, Schema):
        return object
    if isinstance(object, type) and issubclass(object, BaseModel):
        return ModelSchema(object)
    return TypeSchema(object)


__all__ = (
    "FieldSpec",
    "Issue",
    "Validation",
    "Schema",
    "ModelSchema",
    "TypeSchema",
    "isarray",
    "adapt",
)
