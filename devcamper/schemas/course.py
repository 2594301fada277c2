from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

Skill = Literal["beginner", "intermediate", "advanced"]


class CourseCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=120)
    description: str = Field(..., min_length=1)
    weeks: int = Field(..., gt=0)
    tuition: float = Field(..., ge=0)
    minimum_skill: Skill
    scholarship_available: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = Field(None, min_length=1)
    weeks: Optional[int] = Field(None, gt=0)
    tuition: Optional[float] = Field(None, ge=0)
    minimum_skill: Optional[Skill] = None
    scholarship_available: Optional[bool] = None

    @field_validator(
        "title", "description", "weeks", "tuition", "minimum_skill", "scholarship_available", mode="before"
    )
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CourseOut(BaseModel):
    id: int
    title: str
    description: str
    weeks: int
    tuition: float
    minimum_skill: str
    scholarship_available: bool = False
    bootcamp: int = Field(..., validation_alias="bootcamp_id")
    user: int = Field(..., validation_alias="user_id")
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
