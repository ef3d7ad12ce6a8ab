"""Field specs: how a value is pulled out of an item."""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict


class FieldPath(BaseModel):
    """
    A dotted path into an item, e.g. "company.name" or "data.results".
    """
    model_config = ConfigDict(frozen=True)

    path: str


class FieldExtractor(BaseModel):
    """
    A function receiving the item and returning the value verbatim.
    """
    model_config = ConfigDict(frozen=True)

    fn: Callable[[Any], Any]


FieldSpec = FieldPath | FieldExtractor
