"""Base pydantic model shared by every persisted entity."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # JSON en camelCase (probableCompletion, isSerious...), attributs en snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def replace(self, **changes):
        """Return a new validated copy with `changes` applied.

        model_copy(update=...) skips validation, so every substitution in the
        document goes through here instead.
        """
        return type(self).model_validate({**self.model_dump(), **changes})

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def required_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value
