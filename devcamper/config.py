import os
from dotenv import load_dotenv

# Load environment variables if in development
if os.getenv("ENVIRONMENT") == "development":
    load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "production")

SQLALCHEMY_DATABASE_URL = os.getenv("DB_URL_STRING", "sqlite:///./devcamper.db")

SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    raise RuntimeError("SECRET_KEY is not set. Please configure it in the environment.")

ALGORITHM = os.getenv("ALGORITHM", "HS256")
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", 30 * 24 * 60))
JWT_COOKIE_EXPIRE_DAYS = int(os.getenv("JWT_COOKIE_EXPIRE_DAYS", 30))
RESET_TOKEN_EXPIRE_MINUTES = 10

GEOCODER_API_KEY = os.getenv("GEOCODER_API_KEY")
GEOCODER_URL = os.getenv(
    "GEOCODER_URL", "https://www.mapquestapi.com/geocoding/v1/address"
)

SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
MAIL_FROM_EMAIL = os.getenv("MAIL_FROM_EMAIL", "noreply@devcamper.io")

FILE_UPLOAD_PATH = os.getenv("FILE_UPLOAD_PATH", "./public/uploads")
MAX_FILE_UPLOAD = int(os.getenv("MAX_FILE_UPLOAD", 1000000))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
