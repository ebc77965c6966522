"""Report validation.

Compiles a ReportSchema descriptor into a pydantic model with strict scalars and checks a
decoded JSON value against it. Nothing is coerced or repaired: a reply that
does not match the declared shape is a failure, reported field by field.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Type

from pydantic import AllowInfNan, BaseModel, ConfigDict, Field, Strict, ValidationError, create_model

from ..errors import ValidationFailed
from ..schemas.report import FieldSpec, ReportSchema
from ..schemas.results import FieldFailure

# Scalars are strict: "82" is not a number and 1 is not a boolean.
_TEXT = Annotated[str, Strict()]
_NUMBER = Annotated[float, Strict(), AllowInfNan(False)]
_FLAG = Annotated[bool, Strict()]

_CONFIG = ConfigDict(extra="ignore")

_REASONS = {
    "missing": "missing",
    "literal_error": "not_allowed",
    "finite_number": "not_finite",
    "string_type": "wrong_type",
    "float_type": "wrong_type",
    "bool_type": "wrong_type",
    "list_type": "wrong_type",
    "model_type": "wrong_type",
    "model_attributes_type": "wrong_type",
    "dict_type": "wrong_type",
}


def _model_name(path: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in path.replace("-", "_").split("_")) or "Report"


def _annotation(name: str, spec: FieldSpec) -> Any:
    if spec.type == "string":
        if spec.allowed:
            return Literal[tuple(spec.allowed)]
        return _TEXT
    if spec.type == "number":
        return _NUMBER
    if spec.type == "boolean":
        return _FLAG
    if spec.type == "string_array":
        return List[_TEXT]
    return _compile(_model_name(name), spec.fields)


def _compile(model_name: str, fields: Dict[str, FieldSpec]) -> Type[BaseModel]:
    definitions: Dict[str, Tuple[Any, Any]] = {}
    for name, spec in fields.items():
        annotation = _annotation(name, spec)
        if spec.required:
            definitions[name] = (annotation, Field(..., description=spec.description))
        else:
            definitions[name] = (Optional[annotation], Field(None, description=spec.description))
    return create_model(model_name, __config__=_CONFIG, **definitions)


def build_report_model(schema: ReportSchema) -> Type[BaseModel]:
    """Compile the descriptor into a pydantic model class."""
    return _compile(_model_name(schema.name), schema.fields)


def output_json_schema(schema: ReportSchema) -> Dict[str, Any]:
    """JSON Schema of the report, sent to the model as the desired output shape."""
    return build_report_model(schema).model_json_schema()


def _to_failure(error: Dict[str, Any]) -> FieldFailure:
    field = ".".join(str(part) for part in error["loc"]) or "<root>"
    return FieldFailure(
        field=field,
        reason=_REASONS.get(error["type"], "invalid"),
        message=error["msg"],
    )


def validate_report(schema: ReportSchema, value: Any) -> BaseModel:
    """
    Check a decoded JSON value against a report descriptor.

    Returns the typed report on success. Optional fields missing from the
    value come back as None. Raises ValidationFailed listing every offending
    field otherwise. Numeric ranges in descriptions are not enforced.
    """
    model = build_report_model(schema)
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise ValidationFailed([_to_failure(err) for err in e.errors()])
