from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from devcamper.database.session import Base

CAREERS = (
    "Mobile Development",
    "Web Development",
    "UI/UX",
    "Data Science",
    "Business",
    "Other",
)


class BootcampCareer(Base):
    __tablename__ = "BootcampCareers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    bootcamp_id = Column(
        Integer, ForeignKey("Bootcamps.id", ondelete="CASCADE"), nullable=False
    )
    career = Column(String(30), nullable=False)


class Bootcamp(Base):
    __tablename__ = "Bootcamps"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False)
    slug = Column(String(80))
    description = Column(String(500), nullable=False)
    website = Column(String(255))
    phone = Column(String(20))
    email = Column(String(120))

    # GeoJSON point, derived from the address on create
    location_type = Column(String(10))
    longitude = Column(Float)
    latitude = Column(Float)
    formatted_address = Column(String(255))
    street = Column(String(120))
    city = Column(String(60))
    state = Column(String(30))
    zipcode = Column(String(20))
    country = Column(String(30))

    average_rating = Column(Float)
    average_cost = Column(Integer)
    photo = Column(String(120), default="no-photo.jpg")
    housing = Column(Boolean, default=False)
    job_assistance = Column(Boolean, default=False)
    job_guarantee = Column(Boolean, default=False)
    accept_gi = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # foreign key
    user_id = Column(Integer, ForeignKey("Users.id"), nullable=False)

    career_tags = relationship(
        "BootcampCareer",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="BootcampCareer.id",
    )

    @property
    def careers(self):
        return [tag.career for tag in self.career_tags]

    @careers.setter
    def careers(self, values):
        self.career_tags = [BootcampCareer(career=value) for value in values]

    @property
    def location(self):
        if self.location_type is None:
            return None
        return {
            "type": self.location_type,
            "coordinates": [self.longitude, self.latitude],
            "formattedAddress": self.formatted_address,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zipcode": self.zipcode,
            "country": self.country,
        }
