from devcamper.models.user import User
from devcamper.models.bootcamp import Bootcamp, BootcampCareer
from devcamper.models.course import Course
