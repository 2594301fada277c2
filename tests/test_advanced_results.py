import pytest
from starlette.datastructures import QueryParams

from devcamper.models import Course
from devcamper.utils.advancedResults import build_filters, build_ordering, project
from devcamper.utils.errorResponse import ValidationFailed


@pytest.fixture
def catalog(register, create_bootcamp, add_course):
    _, boston = register(email="boston@example.com")
    _, ny = register(email="ny@example.com")
    first = create_bootcamp(boston, name="Boston Camp", careers=["Web Development", "Business"])
    second = create_bootcamp(
        ny,
        name="New York Camp",
        address="45 Upper College Rd New York NY 10001",
        careers=["Data Science"],
        housing=False,
    )
    for title, tuition in (("Cheap", 500), ("Mid", 1000), ("Pricey", 9000)):
        add_course(boston, first["id"], title=title, tuition=tuition)
    for title, tuition in (("Data 101", 2500), ("Data 201", 12000)):
        add_course(ny, second["id"], title=title, tuition=tuition)
    return first, second


def test_filter_sort_and_limit_on_tuition(client, catalog):
    body = client.get("/api/v1/courses?tuition[gte]=1000&sort=-tuition&limit=2&page=1").json()

    tuitions = [c["tuition"] for c in body["data"]]
    assert len(tuitions) <= 2
    assert all(t >= 1000 for t in tuitions)
    assert tuitions == sorted(tuitions, reverse=True)
    assert tuitions == [12000, 9000]
    assert body["pagination"] == {"total": 4, "next": {"page": 2, "limit": 2}}


def test_second_page_has_prev(client, catalog):
    body = client.get("/api/v1/courses?tuition[gte]=1000&sort=-tuition&limit=2&page=2").json()

    assert [c["tuition"] for c in body["data"]] == [2500, 1000]
    assert body["count"] == 2
    assert body["pagination"] == {"total": 4, "prev": {"page": 1, "limit": 2}}


def test_in_and_comparison_operators(client, catalog):
    body = client.get("/api/v1/courses?tuition[in]=500,12000&sort=tuition").json()
    assert [c["title"] for c in body["data"]] == ["Cheap", "Data 201"]

    body = client.get("/api/v1/courses?tuition[gt]=500&tuition[lt]=9000&sort=tuition").json()
    assert [c["title"] for c in body["data"]] == ["Mid", "Data 101"]


def test_default_sort_is_newest_first(client, catalog):
    titles = [c["title"] for c in client.get("/api/v1/courses").json()["data"]]

    assert titles == ["Data 201", "Data 101", "Pricey", "Mid", "Cheap"]


def test_select_projects_fields_and_keeps_id(client, catalog):
    body = client.get("/api/v1/bootcamps?select=name,averageCost&sort=name").json()

    first = body["data"][0]
    assert set(first) == {"id", "name", "averageCost", "courses"}
    assert first["name"] == "Boston Camp"
    assert first["averageCost"] == 3500


def test_bootcamp_listing_embeds_courses(client, catalog):
    body = client.get("/api/v1/bootcamps?sort=name").json()

    assert body["success"] is True
    assert body["count"] == 2
    assert [c["title"] for c in body["data"][0]["courses"]] == ["Cheap", "Mid", "Pricey"]


def test_course_listing_embeds_bootcamp_summary(client, catalog):
    first, _ = catalog
    body = client.get("/api/v1/courses?title=Mid").json()

    assert body["count"] == 1
    assert body["data"][0]["bootcamp"] == {
        "id": first["id"],
        "name": "Boston Camp",
        "description": first["description"],
    }


def test_boolean_location_and_career_filters(client, catalog):
    assert [b["name"] for b in client.get("/api/v1/bootcamps?housing=false").json()["data"]] == ["New York Camp"]
    assert [b["name"] for b in client.get("/api/v1/bootcamps?location.state=MA").json()["data"]] == ["Boston Camp"]
    assert [b["name"] for b in client.get("/api/v1/bootcamps?careers[in]=Business,UI/UX").json()["data"]] == [
        "Boston Camp"
    ]
    assert client.get("/api/v1/bootcamps?averageCost[lte]=5000").json()["count"] == 1


def test_unknown_field_and_bad_values_are_rejected(client, catalog):
    unknown = client.get("/api/v1/courses?hashedPassword=x")
    assert unknown.status_code == 400
    assert unknown.json()["error"] == "Invalid query field: hashedPassword"

    assert client.get("/api/v1/courses?tuition[gte]=lots").status_code == 400
    assert client.get("/api/v1/courses?page=0").status_code == 400
    assert client.get("/api/v1/courses?limit=abc").status_code == 400


def test_reserved_keys_never_become_filters():
    params = QueryParams("select=title&sort=-tuition&page=2&limit=5&weeks=8")

    criteria = build_filters(Course, params)

    assert len(criteria) == 1
    assert "weeks" in str(criteria[0])


def test_ordering_parses_direction():
    ordering = build_ordering(Course, "-tuition,title")

    assert str(ordering[0]).endswith("tuition DESC")
    assert str(ordering[1]).endswith("title ASC")


def test_project_without_select_returns_document():
    document = {"id": 1, "title": "x"}

    assert project(document, None) is document


def test_invalid_sort_field():
    with pytest.raises(ValidationFailed):
        build_ordering(Course, "nope")
