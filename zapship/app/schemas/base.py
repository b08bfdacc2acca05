"""
Shared Pydantic configuration.

The wire format is camelCase (``trackingId``, ``senderEmail``); requests may
use either camelCase or the snake_case field names.
"""

from decimal import Decimal
from typing import Annotated, Union
from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _money_to_json(value: Decimal) -> Union[int, float]:
    # Whole amounts go out as integers: 500, not 500.0
    if value == value.to_integral_value():
        return int(value)
    return float(value)


Money = Annotated[Decimal, PlainSerializer(_money_to_json, return_type=Union[int, float], when_used="json")]
