from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.orm import Session

from devcamper.api.auth import user_dependency
from devcamper.api.bootcamps import get_bootcamp_or_404
from devcamper.database.courseStore import CourseStore
from devcamper.database.session import get_db
from devcamper.models import Course
from devcamper.schemas.bootcamp import BootcampSummary
from devcamper.schemas.course import CourseCreate, CourseOut, CourseUpdate
from devcamper.utils.advancedResults import advanced_results, serialize
from devcamper.utils.authorizeAction import Action, ensure_authorized
from devcamper.utils.bootcampConsistency import recompute_average_cost
from devcamper.utils.errorResponse import NotFound, to_id

router = APIRouter(prefix="/api/v1", tags=["courses"])

db_dependency = Annotated[Session, Depends(get_db)]


def embed_bootcamp(db: Session, course: Course):
    return BootcampSummary.model_validate(course.bootcamp).model_dump(mode="json")


def get_course_or_404(db: Session, course_id: str) -> Course:
    course = CourseStore(db).find_by_id(to_id(course_id))
    if course is None:
        raise NotFound(f"No course with id of {course_id}")
    return course


def course_with_bootcamp(db: Session, course: Course):
    document = serialize(CourseOut, course)
    document["bootcamp"] = embed_bootcamp(db, course)
    return document


# ---------------------------- Public
@router.get("/courses")
def get_courses(request: Request, db: db_dependency):
    return advanced_results(
        db, Course, CourseOut, request.query_params, populate=("bootcamp", embed_bootcamp)
    )


@router.get("/bootcamps/{bootcamp_id}/courses")
def get_bootcamp_courses(bootcamp_id: str, db: db_dependency):
    bootcamp = get_bootcamp_or_404(db, bootcamp_id)
    courses = CourseStore(db).find_courses_by_bootcamp(bootcamp.id)
    return {
        "success": True,
        "count": len(courses),
        "data": [serialize(CourseOut, c) for c in courses],
    }


@router.get("/courses/{course_id}")
def get_course(course_id: str, db: db_dependency):
    course = get_course_or_404(db, course_id)
    return {"success": True, "data": course_with_bootcamp(db, course)}


# ---------------------------- Owner / admin
@router.post("/bootcamps/{bootcamp_id}/courses", status_code=201)
def add_course(
    bootcamp_id: str,
    draft: CourseCreate,
    db: db_dependency,
    user: user_dependency,
    background_tasks: BackgroundTasks,
):
    bootcamp = get_bootcamp_or_404(db, bootcamp_id)
    ensure_authorized(user, bootcamp, Action.CREATE)

    course = CourseStore(db).create_course(draft.model_dump(), bootcamp, user)
    background_tasks.add_task(recompute_average_cost, bootcamp.id)

    return {"success": True, "data": serialize(CourseOut, course)}


@router.put("/courses/{course_id}")
def update_course(
    course_id: str,
    patch: CourseUpdate,
    db: db_dependency,
    user: user_dependency,
    background_tasks: BackgroundTasks,
):
    course = get_course_or_404(db, course_id)
    ensure_authorized(user, course, Action.UPDATE)

    changes = patch.model_dump(exclude_unset=True)
    tuition_changed = "tuition" in changes and changes["tuition"] != course.tuition

    course = CourseStore(db).update_by_id(course.id, changes)
    if tuition_changed:
        background_tasks.add_task(recompute_average_cost, course.bootcamp_id)

    return {"success": True, "data": serialize(CourseOut, course)}


@router.delete("/courses/{course_id}")
def delete_course(
    course_id: str,
    db: db_dependency,
    user: user_dependency,
    background_tasks: BackgroundTasks,
):
    course = get_course_or_404(db, course_id)
    ensure_authorized(user, course, Action.DELETE)

    bootcamp_id = course.bootcamp_id
    CourseStore(db).delete_by_id(course.id)
    background_tasks.add_task(recompute_average_cost, bootcamp_id)

    return {"success": True, "data": {}}
