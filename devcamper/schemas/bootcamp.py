from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

Career = Literal[
    "Mobile Development",
    "Web Development",
    "UI/UX",
    "Data Science",
    "Business",
    "Other",
]


class BootcampCreate(BaseModel):
    """Client draft of a bootcamp.

    Derived fields (slug, location, averageCost, averageRating, photo, owner)
    are not declared, so anything the client sends for them is dropped.
    """

    name: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=500)
    website: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    address: str = Field(..., min_length=1)
    careers: List[Career] = Field(..., min_length=1)
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class BootcampUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    website: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, min_length=1)
    careers: Optional[List[Career]] = Field(None, min_length=1)
    housing: Optional[bool] = None
    job_assistance: Optional[bool] = None
    job_guarantee: Optional[bool] = None
    accept_gi: Optional[bool] = None

    @field_validator(
        "name",
        "description",
        "address",
        "careers",
        "housing",
        "job_assistance",
        "job_guarantee",
        "accept_gi",
        mode="before",
    )
    @classmethod
    def reject_null(cls, value):
        # these columns have no null state; omit the field to leave it unchanged
        if value is None:
            raise ValueError("may not be null")
        return value

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class BootcampSummary(BaseModel):
    id: int
    name: str
    description: str

    class Config:
        from_attributes = True


class BootcampOut(BaseModel):
    id: int
    name: str
    slug: Optional[str] = None
    description: str
    website: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    location: Optional[Dict[str, Any]] = None
    careers: List[str] = []
    average_rating: Optional[float] = None
    average_cost: Optional[int] = None
    photo: Optional[str] = None
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False
    user: int = Field(..., validation_alias="user_id")
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
