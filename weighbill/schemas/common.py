# weighbill/schemas/common.py
from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from weighbill.services.billing_math import D, non_negative

# Decimal in, plain JSON number out
Num = Annotated[Decimal, BeforeValidator(D),
                PlainSerializer(float, return_type=float, when_used="json")]
NonNeg = Annotated[Decimal, BeforeValidator(non_negative),
                   PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Remote payloads are camelCase; python side stays snake_case."""
    model_config = ConfigDict(alias_generator=to_camel,
                              populate_by_name=True,
                              from_attributes=True)

