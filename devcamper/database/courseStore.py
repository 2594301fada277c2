from typing import Any, Dict, List

from sqlalchemy.orm import Session

from devcamper.database.resourceStore import ResourceStore
from devcamper.models import Bootcamp, Course, User


class CourseStore(ResourceStore):
    def __init__(self, db: Session):
        super().__init__(db, Course)

    def find_courses_by_bootcamp(self, bootcamp_id: int) -> List[Course]:
        return (
            self.query()
            .filter(Course.bootcamp_id == bootcamp_id)
            .order_by(Course.created_at, Course.id)
            .all()
        )

    def create_course(self, draft: Dict[str, Any], bootcamp: Bootcamp, author: User) -> Course:
        fields = {k: v for k, v in draft.items() if k not in ("bootcamp_id", "user_id")}
        return self.create(bootcamp_id=bootcamp.id, user_id=author.id, **fields)
