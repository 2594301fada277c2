import pytest

from devcamper.database.bootcampStore import BootcampStore
from devcamper.database.courseStore import CourseStore
from devcamper.models import Bootcamp, Course, User
from devcamper.utils import bootcampConsistency
from devcamper.utils.bootcampConsistency import (
    cascade_delete_courses,
    compute_average_cost,
    delete_bootcamp,
    recompute_average_cost,
)
from devcamper.utils.errorResponse import ServerError


@pytest.fixture
def owner(db):
    user = User(name="Owner", email="owner@example.com", role="publisher", hashed_password="x")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def bootcamp(db, owner):
    return BootcampStore(db).create(
        name="Devworks Bootcamp",
        description="Full stack bootcamp",
        careers=["Web Development"],
        user_id=owner.id,
    )


def add_courses(db, bootcamp, owner, *tuitions):
    store = CourseStore(db)
    return [
        store.create(
            title=f"Course {i}",
            description="d",
            weeks=8,
            tuition=tuition,
            minimum_skill="beginner",
            bootcamp_id=bootcamp.id,
            user_id=owner.id,
        )
        for i, tuition in enumerate(tuitions)
    ]


def average_cost_of(db, bootcamp_id):
    db.expire_all()
    return db.get(Bootcamp, bootcamp_id).average_cost


def test_compute_average_cost_rounds_up():
    assert compute_average_cost(10000.2) == 10001
    assert compute_average_cost(10000.0) == 10000
    assert compute_average_cost(None) is None


def test_recompute_writes_ceiling_of_mean_tuition(db, bootcamp, owner):
    add_courses(db, bootcamp, owner, 10000, 12000, 8001)

    assert recompute_average_cost(bootcamp.id) == 10001
    assert average_cost_of(db, bootcamp.id) == 10001


def test_recompute_ignores_other_bootcamps_courses(db, bootcamp, owner):
    other = BootcampStore(db).create(
        name="Codemasters", description="d", careers=["Business"], user_id=owner.id
    )
    add_courses(db, bootcamp, owner, 5000)
    add_courses(db, other, owner, 20000)

    recompute_average_cost(bootcamp.id)
    assert average_cost_of(db, bootcamp.id) == 5000


def test_recompute_clears_average_when_no_courses_remain(db, bootcamp, owner):
    (course,) = add_courses(db, bootcamp, owner, 9000)
    recompute_average_cost(bootcamp.id)
    assert average_cost_of(db, bootcamp.id) == 9000

    CourseStore(db).delete_by_id(course.id)
    recompute_average_cost(bootcamp.id)
    assert average_cost_of(db, bootcamp.id) is None


def test_recompute_for_missing_bootcamp_is_a_logged_noop(caplog):
    assert recompute_average_cost(9999) is None
    assert "no longer exists" in caplog.text


def test_recompute_failures_are_absorbed(caplog):
    class ExplodingSession:
        def get(self, *args, **kwargs):
            raise RuntimeError("connection reset")

        def close(self):
            pass

    assert recompute_average_cost(1, session_factory=ExplodingSession) is None
    assert "Failed to recompute averageCost for bootcamp 1" in caplog.text


def test_cascade_deletes_only_that_bootcamps_courses(db, bootcamp, owner):
    other = BootcampStore(db).create(
        name="Codemasters", description="d", careers=["Business"], user_id=owner.id
    )
    add_courses(db, bootcamp, owner, 1000, 2000, 3000)
    add_courses(db, other, owner, 4000)

    assert cascade_delete_courses(db, bootcamp.id) == 3
    assert db.query(Course).filter(Course.bootcamp_id == bootcamp.id).count() == 0
    assert db.query(Course).filter(Course.bootcamp_id == other.id).count() == 1


def test_delete_bootcamp_removes_children_then_parent(db, bootcamp, owner):
    add_courses(db, bootcamp, owner, 1000, 2000)
    bootcamp_id = bootcamp.id

    delete_bootcamp(db, bootcamp)

    assert db.query(Course).filter(Course.bootcamp_id == bootcamp_id).count() == 0
    assert db.get(Bootcamp, bootcamp_id) is None


def test_failed_cascade_keeps_the_bootcamp(db, bootcamp, owner, monkeypatch):
    add_courses(db, bootcamp, owner, 1000)

    def failing_cascade(db, bootcamp_id):
        raise RuntimeError("write conflict")

    monkeypatch.setattr(bootcampConsistency, "cascade_delete_courses", failing_cascade)

    with pytest.raises(ServerError) as exc:
        delete_bootcamp(db, bootcamp)

    assert exc.value.status_code == 500
    db.expire_all()
    assert db.get(Bootcamp, bootcamp.id) is not None
    assert db.query(Course).filter(Course.bootcamp_id == bootcamp.id).count() == 1


def test_failed_parent_delete_is_fatal(db, bootcamp, owner, monkeypatch):
    add_courses(db, bootcamp, owner, 1000)

    def failing_delete(self, resource_id):
        raise RuntimeError("lock timeout")

    monkeypatch.setattr(BootcampStore, "delete_by_id", failing_delete)

    with pytest.raises(ServerError):
        delete_bootcamp(db, bootcamp)

    assert db.query(Course).filter(Course.bootcamp_id == bootcamp.id).count() == 0
