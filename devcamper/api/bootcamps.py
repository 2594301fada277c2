import logging
import os
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from sqlalchemy.orm import Session
from starlette import status

from devcamper import config
from devcamper.api.auth import user_dependency
from devcamper.database.bootcampStore import BootcampStore
from devcamper.database.courseStore import CourseStore
from devcamper.database.session import get_db
from devcamper.models import Bootcamp, BootcampCareer
from devcamper.schemas.bootcamp import BootcampCreate, BootcampOut, BootcampUpdate
from devcamper.schemas.course import CourseOut
from devcamper.utils.advancedResults import advanced_results, serialize
from devcamper.utils.authorizeAction import Action, ensure_authorized
from devcamper.utils.bootcampConsistency import delete_bootcamp as delete_bootcamp_and_courses
from devcamper.utils.errorResponse import NotFound, ServerError, ValidationFailed, to_id
from devcamper.utils.geo import distance_to_radians
from devcamper.utils.geocoder import Geocoder, get_geocoder

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/bootcamps", tags=["bootcamps"])

db_dependency = Annotated[Session, Depends(get_db)]
geocoder_dependency = Annotated[Geocoder, Depends(get_geocoder)]

LOCATION_ALIASES = {
    "location.city": "city",
    "location.state": "state",
    "location.zipcode": "zipcode",
    "location.country": "country",
}
LIST_FIELDS = {"careers": (Bootcamp.career_tags, BootcampCareer.career)}


def embed_courses(db: Session, bootcamp: Bootcamp):
    return [
        serialize(CourseOut, course)
        for course in CourseStore(db).find_courses_by_bootcamp(bootcamp.id)
    ]


def get_bootcamp_or_404(db: Session, bootcamp_id: str) -> Bootcamp:
    bootcamp = BootcampStore(db).find_by_id(to_id(bootcamp_id))
    if bootcamp is None:
        raise NotFound(f"Bootcamp not found with id of {bootcamp_id}")
    return bootcamp


# ---------------------------- Public
@router.get("")
def get_bootcamps(request: Request, db: db_dependency):
    return advanced_results(
        db,
        Bootcamp,
        BootcampOut,
        request.query_params,
        populate=("courses", embed_courses),
        aliases=LOCATION_ALIASES,
        list_fields=LIST_FIELDS,
    )


@router.get("/radius/{zipcode}/{distance}")
def get_bootcamps_within_radius(
    zipcode: str, distance: float, db: db_dependency, geocoder: geocoder_dependency
):
    """Bootcamps within ``distance`` km of the zipcode, on a sphere of radius 6378 km."""
    if distance < 0:
        raise ValidationFailed("Distance must not be negative")

    loc = geocoder.geocode(zipcode)
    bootcamps = BootcampStore(db).find_within_radius(
        loc.latitude, loc.longitude, distance_to_radians(distance)
    )

    return {
        "success": True,
        "count": len(bootcamps),
        "data": [serialize(BootcampOut, b) for b in bootcamps],
    }


@router.get("/{bootcamp_id}")
def get_bootcamp(bootcamp_id: str, db: db_dependency):
    bootcamp = get_bootcamp_or_404(db, bootcamp_id)
    return {"success": True, "data": serialize(BootcampOut, bootcamp)}


# ---------------------------- Owner / admin
@router.post("", status_code=status.HTTP_201_CREATED)
def create_bootcamp(
    draft: BootcampCreate, db: db_dependency, user: user_dependency, geocoder: geocoder_dependency
):
    bootcamps = BootcampStore(db)
    ensure_authorized(
        user, Bootcamp, Action.CREATE, owned_bootcamp=bootcamps.find_by_owner(user.id)
    )

    bootcamp = bootcamps.create_bootcamp(draft.model_dump(), user, geocoder)
    return {"success": True, "data": serialize(BootcampOut, bootcamp)}


@router.put("/{bootcamp_id}")
def update_bootcamp(
    bootcamp_id: str,
    patch: BootcampUpdate,
    db: db_dependency,
    user: user_dependency,
    geocoder: geocoder_dependency,
):
    bootcamp = get_bootcamp_or_404(db, bootcamp_id)
    ensure_authorized(user, bootcamp, Action.UPDATE)

    bootcamp = BootcampStore(db).update_bootcamp(
        bootcamp, patch.model_dump(exclude_unset=True), geocoder
    )
    return {"success": True, "data": serialize(BootcampOut, bootcamp)}


@router.delete("/{bootcamp_id}")
def delete_bootcamp(bootcamp_id: str, db: db_dependency, user: user_dependency):
    bootcamp = get_bootcamp_or_404(db, bootcamp_id)
    ensure_authorized(user, bootcamp, Action.DELETE)

    delete_bootcamp_and_courses(db, bootcamp)
    return {"success": True, "data": {}}


@router.put("/{bootcamp_id}/photo")
def bootcamp_photo_upload(
    bootcamp_id: str,
    db: db_dependency,
    user: user_dependency,
    file: Annotated[Optional[UploadFile], File()] = None,
):
    bootcamp = get_bootcamp_or_404(db, bootcamp_id)
    ensure_authorized(user, bootcamp, Action.UPDATE)

    if file is None:
        raise ValidationFailed("Please upload a file")

    if not (file.content_type or "").startswith("image"):
        raise ValidationFailed("Please upload an image file")

    too_large = file.size is not None and file.size > config.MAX_FILE_UPLOAD
    contents = b"" if too_large else file.file.read(config.MAX_FILE_UPLOAD + 1)
    if too_large or len(contents) > config.MAX_FILE_UPLOAD:
        raise ValidationFailed(
            f"Please upload an image less than {config.MAX_FILE_UPLOAD}"
        )

    filename = f"photo_{bootcamp.id}{os.path.splitext(file.filename or '')[1]}"
    try:
        os.makedirs(config.FILE_UPLOAD_PATH, exist_ok=True)
        with open(os.path.join(config.FILE_UPLOAD_PATH, filename), "wb") as out:
            out.write(contents)
    except OSError as e:
        logger.error(f"Problem with file upload for bootcamp {bootcamp.id}: {e}")
        raise ServerError("Problem with file upload")

    BootcampStore(db).set_photo(bootcamp, filename)
    return {"success": True, "data": filename}
