from typing import Annotated, Optional
from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from invoice_api.v1_0.models.constraints import CUSTOMER_RULES

_NAME = CUSTOMER_RULES["name"].max_length
_EMAIL = CUSTOMER_RULES["email"].max_length
_ADDRESS = CUSTOMER_RULES["address"].max_length
_TAX_ID = CUSTOMER_RULES["tax_id"].max_length
_PHONE = CUSTOMER_RULES["phone"].max_length

def _checked_email(v: str) -> str:
    """Validate like EmailStr but keep the address exactly as given."""
    if len(v) > _EMAIL:
        raise ValueError(f"email must be at most {_EMAIL} characters")
    try:
        validate_email(v, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}") from e
    return v

Email = Annotated[str, AfterValidator(_checked_email)]

class CustomerCreate(BaseModel):
    """Input schema to create a customer."""
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "name": "Acme Corp",
                "email": "billing@acme.com",
                "address": "1 Main St",
                "tax_id": "TAX-001",
                "phone": "555-0100",
            }
        },
    )

    name: str = Field(..., min_length=1, max_length=_NAME)
    email: Email
    address: Optional[str] = Field(None, max_length=_ADDRESS)
    tax_id: Optional[str] = Field(None, max_length=_TAX_ID)
    phone: Optional[str] = Field(None, max_length=_PHONE)

class CustomerUpdate(BaseModel):
    """Partial update schema for a customer."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=_NAME)
    email: Optional[Email] = None
    address: Optional[str] = Field(None, max_length=_ADDRESS)
    tax_id: Optional[str] = Field(None, max_length=_TAX_ID)
    phone: Optional[str] = Field(None, max_length=_PHONE)
