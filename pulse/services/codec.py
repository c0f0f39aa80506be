"""
Encodage du document: JSON (indent 2, UTF-8) et base64 pour l'API GitHub.
"""

import base64
import binascii
import json
from typing import Type, TypeVar

from pydantic import ValidationError

from pulse.core.errors import DeserializationError
from pulse.schemas.common import CamelModel

M = TypeVar("M", bound=CamelModel)


def to_json(model: CamelModel) -> str:
    return json.dumps(model.to_json_dict(), indent=2, ensure_ascii=False)


def from_json(text: str, model_cls: Type[M]) -> M:
    try:
        return model_cls.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError, TypeError) as e:
        raise DeserializationError(f"invalid {model_cls.__name__} document: {e}") from e


def to_base64(model: CamelModel) -> str:
    return base64.b64encode(to_json(model).encode("utf-8")).decode("ascii")


def from_base64(content: str, model_cls: Type[M]) -> M:
    # GitHub coupe le base64 en lignes de 60 caractères
    try:
        raw = base64.b64decode("".join(content.split()), validate=True)
        text = raw.decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise DeserializationError(f"invalid base64 payload: {e}") from e
    return from_json(text, model_cls)
