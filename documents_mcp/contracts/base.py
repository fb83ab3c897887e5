"""Input contracts: one pydantic model per tool, two views of it.

``validate`` turns raw tool arguments into a fully-defaulted model instance
or a ``ContractViolation``; ``describe`` turns the same model into the JSON
Schema advertised to clients. Field lists are never written twice.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

C = TypeVar("C", bound="Contract")

# Keys whose values are data rather than nested schemas
_OPAQUE_KEYS = {"default", "const", "enum", "examples"}
# Keys whose values map user-chosen names to schemas
_NAMED_SCHEMA_KEYS = {"properties", "patternProperties"}


class Contract(BaseModel):
    """Base class for tool input contracts.

    Wire names are camelCase (``filePath``); attributes are snake_case
    (``file_path``). Either spelling is accepted on input and unknown keys
    are dropped.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


@dataclass(frozen=True)
class FieldError:
    location: str
    message: str

    def render(self) -> str:
        return f"{self.location}: {self.message}" if self.location else self.message


@dataclass(frozen=True)
class ContractViolation:
    """Structured validation failure for one tool call."""

    contract: str
    errors: Tuple[FieldError, ...]

    @property
    def message(self) -> str:
        return "; ".join(error.render() for error in self.errors)

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(error.location for error in self.errors if error.location)


def _error_message(error: Dict[str, Any]) -> str:
    # Plain ValueErrors raised in validators carry a "Value error, " prefix
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return str(error.get("msg", "Invalid value"))


def violation_from_exception(contract: Type[BaseModel], exc: PydanticValidationError) -> ContractViolation:
    errors = tuple(
        FieldError(
            location=".".join(str(part) for part in error.get("loc", ())),
            message=_error_message(error),
        )
        for error in exc.errors()
    )
    return ContractViolation(contract=contract.__name__, errors=errors)


def validate(contract: Type[C], raw_input: Any) -> Union[C, ContractViolation]:
    """Validate ``raw_input`` against ``contract``.

    Returns a new contract instance with every default filled in, or a
    ``ContractViolation`` describing each failing field. Never raises for
    bad input and never mutates ``raw_input``.
    """
    try:
        return contract.model_validate(raw_input)
    except PydanticValidationError as exc:
        return violation_from_exception(contract, exc)


def _resolve_ref(ref: str, defs: Dict[str, Any]) -> Dict[str, Any]:
    name = ref.rsplit("/", 1)[-1]
    return copy.deepcopy(defs[name])


def _clean(node: Any, defs: Dict[str, Any]) -> Any:
    if isinstance(node, list):
        return [_clean(item, defs) for item in node]
    if not isinstance(node, dict):
        return node

    if "$ref" in node:
        resolved = _resolve_ref(node["$ref"], defs)
        siblings = {key: value for key, value in node.items() if key != "$ref"}
        resolved.update(siblings)
        return _clean(resolved, defs)

    cleaned: Dict[str, Any] = {}
    for key, value in node.items():
        if key in ("title", "$defs", "discriminator"):
            continue
        if key in _OPAQUE_KEYS:
            cleaned[key] = value
        elif key in _NAMED_SCHEMA_KEYS and isinstance(value, dict):
            cleaned[key] = {name: _clean(sub, defs) for name, sub in value.items()}
        else:
            cleaned[key] = _clean(value, defs)
    return cleaned


def describe(contract: Type[BaseModel]) -> Dict[str, Any]:
    """Build the self-contained JSON Schema advertised as a tool's inputSchema."""
    schema = contract.model_json_schema(by_alias=True)
    defs = schema.get("$defs", {})
    described = _clean(schema, defs)
    described.setdefault("type", "object")
    described.setdefault("properties", {})
    return described
