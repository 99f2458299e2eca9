import re
from datetime import date
from typing import ClassVar, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..config import settings
from ..util.masking import MaskedFieldsModel, MaskPolicy
from ..util.pagination import ASC, DEFAULT_PAGE, DEFAULT_PAGE_SIZE, DESC, Page
from ..util.validators import is_valid_date_of_birth, date_of_birth_message

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_!#$%&'*+/=?`{|}~^.-]+@[a-zA-Z0-9.-]+$")

PHONE_NUMBER_LENGTH = 10

# Largest value a database BIGINT column or LIMIT/OFFSET accepts
MAX_DB_INTEGER = 2**63 - 1
MAX_PAGE_SIZE = 1000
MAX_PAGE = MAX_DB_INTEGER // MAX_PAGE_SIZE

# API sort key -> Customer attribute
SORTABLE_FIELDS: Dict[str, str] = {
    "id": "id",
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "phoneNumber": "phone_number",
    "dateOfBirth": "date_of_birth",
    "createdDate": "created_date",
    "lastModifiedDate": "last_modified_date",
}


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomerRequest(CamelModel):
    first_name: str = Field(..., description="Customer's first name", examples=["John"])
    last_name: str = Field(..., description="Customer's last name", examples=["Wick"])
    email: str = Field(..., description="Customer's email address", examples=["jwick@tester.com"])
    phone_number: Optional[str] = Field(
        None,
        description="Customer's phone number, must be exactly 10 characters",
        examples=["6981234567"],
    )
    date_of_birth: date = Field(
        ...,
        description="Customer's date of birth in format YYYY-MM-DD. Must not be in the future and the "
                    "customer should meet the minimum age requirement.",
        examples=["1989-01-02"],
    )

    @field_validator('first_name')
    def first_name_must_be_valid(cls, v):
        return _validate_name(v, "firstName")

    @field_validator('last_name')
    def last_name_must_be_valid(cls, v):
        return _validate_name(v, "lastName")

    @field_validator('email')
    def email_must_be_valid(cls, v):
        if not v:
            raise ValueError("email should not be null or empty")
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email format")
        return v

    @field_validator('phone_number')
    def phone_number_must_be_valid(cls, v):
        if v is not None and len(v) != PHONE_NUMBER_LENGTH:
            raise ValueError(f"phoneNumber should have exactly {PHONE_NUMBER_LENGTH} characters")
        return v

    @field_validator('date_of_birth')
    def date_of_birth_must_be_valid(cls, v):
        if not is_valid_date_of_birth(v, min_age=settings.CUSTOMER_MIN_AGE):
            raise ValueError(date_of_birth_message(settings.CUSTOMER_MIN_AGE))
        return v


class CustomerEmailUpdate(CamelModel):
    email: str = Field(..., examples=["jwick@tester.com"])

    @field_validator('email')
    def email_must_be_valid(cls, v):
        if not v or not v.strip():
            raise ValueError("Email is required")
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Please provide a valid email address")
        return v


class SortItem(CamelModel):
    field: str = Field(..., examples=["lastName"])
    direction: str = Field(ASC, examples=[ASC, DESC])

    @field_validator('field')
    def field_must_be_sortable(cls, v):
        if v in SORTABLE_FIELDS:
            return SORTABLE_FIELDS[v]
        if v in SORTABLE_FIELDS.values():
            return v
        raise ValueError(f"Sorting by '{v}' is not supported. Allowed fields: {', '.join(SORTABLE_FIELDS)}")

    @field_validator('direction')
    def direction_must_be_valid(cls, v):
        direction = (v or ASC).upper()
        if direction not in (ASC, DESC):
            raise ValueError("direction must be either ASC or DESC")
        return direction


class CustomerSearchCriteria(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    page: int = Field(DEFAULT_PAGE, examples=[0])
    size: int = Field(DEFAULT_PAGE_SIZE, examples=[10])
    sort_list: Optional[List[SortItem]] = None

    @field_validator('page', 'size', mode="before")
    def null_paging_uses_defaults(cls, v, info):
        if v is None:
            return DEFAULT_PAGE if info.field_name == "page" else DEFAULT_PAGE_SIZE
        return v

    @field_validator('page')
    def page_must_be_in_range(cls, v):
        if v < 0:
            raise ValueError("page must be a zero or a positive number")
        if v > MAX_PAGE:
            raise ValueError(f"page must not exceed {MAX_PAGE}")
        return v

    @field_validator('size')
    def size_must_be_in_range(cls, v):
        if v <= 0:
            raise ValueError("size must be a positive number")
        if v > MAX_PAGE_SIZE:
            raise ValueError(f"size must not exceed {MAX_PAGE_SIZE}")
        return v


class CustomerResponse(MaskedFieldsModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    __mask_policies__: ClassVar[Dict[str, MaskPolicy]] = {
        "phone_number": MaskPolicy(visible_characters_at_end=3, mask_symbol="*"),
    }

    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str] = None
    date_of_birth: date


class PageMetadata(CamelModel):
    size: int
    number: int
    total_elements: int
    total_pages: int


class CustomerPage(CamelModel):
    content: List[CustomerResponse]
    page: PageMetadata

    @classmethod
    def from_page(cls, page: Page) -> "CustomerPage":
        return cls(
            content=page.content,
            page=PageMetadata(
                size=page.page_request.size,
                number=page.page_request.page,
                total_elements=page.total_elements,
                total_pages=page.total_pages,
            ),
        )


def _validate_name(value: str, field_name: str) -> str:
    if not value:
        raise ValueError(f"{field_name} should not be null or empty")
    if len(value) < 2:
        raise ValueError(f"{field_name} should have at least 2 characters")
    return value
