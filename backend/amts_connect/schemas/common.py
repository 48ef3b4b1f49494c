from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Python attributes are snake_case; the JSON wire format is camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PayloadModel(CamelModel):
    # Clients may send fields beyond the typed ones; they are stored untouched.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    # Defaulted fields written even when the client did not send them.
    always_stored: ClassVar[tuple[str, ...]] = ()

    @model_serializer(mode="wrap")
    def drop_unsent_fields(self, handler) -> dict[str, Any]:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if name in self.model_fields_set or name in self.always_stored:
                continue
            data.pop(field.alias or name, None)
            data.pop(name, None)
        return data

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)
