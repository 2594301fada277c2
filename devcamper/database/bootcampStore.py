import logging
from typing import Any, Dict, List, Optional

from slugify import slugify
from sqlalchemy.orm import Session

from devcamper.database.resourceStore import ResourceStore
from devcamper.models import Bootcamp, User
from devcamper.utils.geo import within_radius
from devcamper.utils.geocoder import Geocoder, GeoLocation

logger = logging.getLogger(__name__)

# never accepted from a client payload
DERIVED_FIELDS = (
    "slug",
    "location",
    "average_cost",
    "average_rating",
    "photo",
    "user_id",
)


def location_fields(loc: GeoLocation) -> Dict[str, Any]:
    return {
        "location_type": "Point",
        "longitude": loc.longitude,
        "latitude": loc.latitude,
        "formatted_address": loc.formatted_address,
        "street": loc.street,
        "city": loc.city,
        "state": loc.state,
        "zipcode": loc.zipcode,
        "country": loc.country,
    }


def derive_fields(draft: Dict[str, Any], geocoder: Geocoder) -> Dict[str, Any]:
    """Pre-persist steps: slug from name, location from address.

    The raw address is dropped once geocoded. Geocoding errors propagate so
    that nothing half-derived is ever written.
    """
    fields = {k: v for k, v in draft.items() if k not in DERIVED_FIELDS}

    if fields.get("name"):
        fields["slug"] = slugify(fields["name"])

    address = fields.pop("address", None)
    if address:
        fields.update(location_fields(geocoder.geocode(address)))

    return fields


class BootcampStore(ResourceStore):
    def __init__(self, db: Session):
        super().__init__(db, Bootcamp)

    def find_by_owner(self, user_id: int) -> Optional[Bootcamp]:
        return self.find_one(user_id=user_id)

    def create_bootcamp(self, draft: Dict[str, Any], owner: User, geocoder: Geocoder) -> Bootcamp:
        fields = derive_fields(draft, geocoder)
        fields["user_id"] = owner.id
        bootcamp = self.create(**fields)
        logger.info(f"Bootcamp {bootcamp.id} created by user {owner.id}")
        return bootcamp

    def update_bootcamp(self, bootcamp: Bootcamp, patch: Dict[str, Any], geocoder: Geocoder) -> Bootcamp:
        return self.update_by_id(bootcamp.id, derive_fields(patch, geocoder))

    def set_photo(self, bootcamp: Bootcamp, filename: str) -> Bootcamp:
        return self.update_by_id(bootcamp.id, {"photo": filename})

    def find_within_radius(self, latitude: float, longitude: float, radius_radians: float) -> List[Bootcamp]:
        candidates = self.find(Bootcamp.location_type.isnot(None))
        return [
            b
            for b in candidates
            if within_radius(b.latitude, b.longitude, latitude, longitude, radius_radians)
        ]
