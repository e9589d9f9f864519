from pydantic import BaseModel, Field, field_validator
from typing import Literal


class CheckoutSessionRequest(BaseModel):
    amount: int = Field(..., description="Amount in cents")
    type: Literal["one-time", "monthly"] = "one-time"
    test_mode: bool = Field(False, alias="testMode")
    success_url: str = Field(..., alias="successUrl", min_length=1)
    cancel_url: str = Field(..., alias="cancelUrl", min_length=1)

    model_config = {
        'populate_by_name': True
    }

    @field_validator('amount', mode='before')
    def validate_amount(cls, v):
        # reject floats and numeric strings rather than coercing them
        if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
            raise ValueError('amount must be a positive integer number of cents')
        return v


class CheckoutSessionOut(BaseModel):
    url: str
