"""Keeps bootcamp-level derived state in line with its courses.

This module is the only writer of ``Bootcamp.average_cost``.

Deleting a bootcamp is two separate commits: its courses go first, then the
bootcamp row. There is no lock across the phases, so a course added to the
bootcamp between them survives as an orphan.
"""
import logging
import math
from typing import Callable, Optional

from sqlalchemy.orm import Session

from devcamper.database import session as db_session
from devcamper.database.bootcampStore import BootcampStore
from devcamper.database.courseStore import CourseStore
from devcamper.models import Bootcamp
from devcamper.utils.errorResponse import ServerError

logger = logging.getLogger(__name__)


def compute_average_cost(mean: Optional[float]) -> Optional[int]:
    # no courses left clears the aggregate
    if mean is None:
        return None
    return math.ceil(mean)


def recompute_average_cost(
    bootcamp_id: int, session_factory: Optional[Callable[[], Session]] = None
) -> Optional[int]:
    """Write ceil(mean tuition) of the bootcamp's courses into ``average_cost``.

    Runs after the triggering response, in its own session. Failures are
    logged and swallowed; a bootcamp that no longer exists is a no-op.
    """
    factory = session_factory or db_session.SessionLocal
    db = factory()
    try:
        bootcamps = BootcampStore(db)
        bootcamp = bootcamps.find_by_id(bootcamp_id)
        if bootcamp is None:
            logger.warning(
                f"Skipping averageCost recompute: bootcamp {bootcamp_id} no longer exists"
            )
            return None

        mean = CourseStore(db).aggregate_mean("tuition", bootcamp_id=bootcamp_id)
        average_cost = compute_average_cost(mean)
        bootcamps.update_by_id(bootcamp_id, {"average_cost": average_cost})
        logger.debug(f"Bootcamp {bootcamp_id} averageCost is now {average_cost}")
        return average_cost
    except Exception:
        logger.exception(f"Failed to recompute averageCost for bootcamp {bootcamp_id}")
        return None
    finally:
        db.close()


def cascade_delete_courses(db: Session, bootcamp_id: int) -> int:
    deleted = CourseStore(db).delete_many(bootcamp_id=bootcamp_id)
    logger.info(f"Deleted {deleted} course(s) of bootcamp {bootcamp_id}")
    return deleted


def delete_bootcamp(db: Session, bootcamp: Bootcamp) -> None:
    """Delete a bootcamp's courses, then the bootcamp itself."""
    bootcamp_id = bootcamp.id

    try:
        cascade_delete_courses(db, bootcamp_id)
    except Exception:
        logger.exception(f"Course cascade failed for bootcamp {bootcamp_id}")
        raise ServerError(f"Could not delete courses of bootcamp {bootcamp_id}")

    try:
        BootcampStore(db).delete_by_id(bootcamp_id)
    except Exception:
        logger.exception(
            f"Bootcamp {bootcamp_id} could not be deleted after its courses were removed"
        )
        raise ServerError(f"Could not delete bootcamp {bootcamp_id}")
