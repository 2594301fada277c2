# initialize.py
from devcamper.database.session import engine, Base
from devcamper.models import User, Bootcamp, BootcampCareer, Course  # noqa: F401


# Create the database tables
def create_tables():
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    create_tables()
    print("Tables created successfully")
