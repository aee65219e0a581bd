"""
Capability schema models for Govee device descriptors.

A device describes its controllable surface as a list of capabilities.
Each capability carries a parameter schema that is exactly one of:

- INTEGER: a bounded integer range
- ENUM: an ordered list of named options
- STRUCT: an ordered list of named fields, each with its own schema

The variants form a discriminated union on the wire key ``dataType``.
Device lists also carry schemas outside that union (``Array`` fields,
malformed ranges). Those parse as UnsupportedParameters so one odd
capability never hides the rest of the device; resolving against one
is a schema mismatch.
"""

import logging
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)

logger = logging.getLogger("govee.capabilities.schema")


class IntegerRange(BaseModel):
    """Inclusive integer bounds, with an optional step ("precision" on the wire)."""

    model_config = ConfigDict(populate_by_name=True)

    min: int
    max: int
    step: Optional[int] = Field(default=None, alias="precision")

    @model_validator(mode="after")
    def _check_bounds(self) -> "IntegerRange":
        if self.min > self.max:
            raise ValueError(f"range min {self.min} is greater than max {self.max}")
        return self

    def clamp(self, value: int) -> int:
        """Clamp value into [min, max]."""
        return min(max(value, self.min), self.max)


class IntegerParameters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data_type: Literal["INTEGER"] = Field(default="INTEGER", alias="dataType")
    unit: Optional[str] = None
    range: IntegerRange


class EnumOption(BaseModel):
    """A named option. ``value`` is sent back to the device unmodified."""

    name: str
    value: Any = None


class EnumParameters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data_type: Literal["ENUM"] = Field(default="ENUM", alias="dataType")
    # May be empty: scene capabilities list no options when none exist
    options: list[EnumOption] = Field(default_factory=list)

    def option_by_name(self, name: str) -> Optional[EnumOption]:
        """Return the first option whose name matches exactly (case-sensitive)."""
        for option in self.options:
            if option.name == name:
                return option
        return None


class UnsupportedParameters(BaseModel):
    """
    A parameter schema outside the INTEGER/ENUM/STRUCT union, or one that
    breaks their invariants. Kept with the raw payload and the reason it
    was not accepted.
    """

    model_config = ConfigDict(populate_by_name=True)

    data_type: str = Field(default="", alias="dataType")
    reason: str = ""
    raw: Any = None


class StructField(BaseModel):
    """
    A named field of a STRUCT schema.

    On the wire the field's own schema is flattened into the field object:
    ``{"fieldName": "musicMode", "dataType": "ENUM", "options": [...]}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    field_name: str = Field(alias="fieldName")
    field_type: Union["ParameterSchema", UnsupportedParameters] = Field(alias="fieldType")
    required: bool = False

    @model_validator(mode="before")
    @classmethod
    def _nest_flattened_type(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "fieldType" in data or "field_type" in data:
            return data
        own_keys = {"fieldName", "field_name", "required"}
        nested = {k: v for k, v in data.items() if k not in own_keys}
        outer = {k: v for k, v in data.items() if k in own_keys}
        outer["fieldType"] = nested
        return outer

    @field_validator("field_type", mode="wrap")
    @classmethod
    def _tolerate_field_type(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return parse_parameters(value, handler)


class StructParameters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data_type: Literal["STRUCT"] = Field(default="STRUCT", alias="dataType")
    fields: list[StructField] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_names(self) -> "StructParameters":
        seen: set[str] = set()
        for f in self.fields:
            if f.field_name in seen:
                raise ValueError(f"duplicate struct field name: {f.field_name}")
            seen.add(f.field_name)
        return self

    def field_by_name(self, name: str) -> Optional[StructField]:
        for f in self.fields:
            if f.field_name == name:
                return f
        return None


ParameterSchema = Annotated[
    Union[IntegerParameters, EnumParameters, StructParameters],
    Field(discriminator="data_type"),
]

StructField.model_rebuild()

_parameters_adapter: TypeAdapter = TypeAdapter(ParameterSchema)


def parse_parameters(value: Any, handler: Optional[ValidatorFunctionWrapHandler] = None) -> Any:
    """
    Validate a wire parameter schema against the strict union.

    A schema the union rejects becomes UnsupportedParameters instead of
    failing the enclosing capability or device.
    """
    if value is None or isinstance(value, BaseModel):
        return handler(value) if handler else value
    try:
        return _parameters_adapter.validate_python(value)
    except ValidationError as e:
        data_type = value.get("dataType", "") if isinstance(value, dict) else ""
        logger.debug("Unsupported parameter schema (dataType=%r): %s", data_type, e)
        return UnsupportedParameters(
            data_type=str(data_type or ""),
            reason=f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}",
            raw=value,
        )


class Capability(BaseModel):
    """A named ("instance") capability of a device."""

    type: str = ""
    instance: str
    parameters: Optional[Union[ParameterSchema, UnsupportedParameters]] = None

    @field_validator("parameters", mode="wrap")
    @classmethod
    def _tolerate_parameters(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return parse_parameters(value, handler)


class Device(BaseModel):
    """Device descriptor as returned by the device list endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    device_id: str = Field(alias="device")
    sku: str
    device_name: str = Field(default="", alias="deviceName")
    device_type: str = Field(default="", alias="type")
    capabilities: list[Capability] = Field(default_factory=list)

    def capability_by_instance(self, instance: str) -> Optional[Capability]:
        """Return the first capability with this exact instance name, if any."""
        for cap in self.capabilities:
            if cap.instance == instance:
                return cap
        return None
