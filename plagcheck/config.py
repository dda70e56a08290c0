import os
from dotenv import load_dotenv

from plagcheck.errors import ConfigurationError
from plagcheck.schemas.credential_schemas import MongoCredentials, RapidApiCredentials

load_dotenv()

# ───── MongoDB (local corpus) ─────
MONGODB_URI = os.getenv("MONGODB_URI", "")
MONGODB_DATABASE = os.getenv("MONGODB_DATABASE", "plagiarism_db")
MONGODB_COLLECTION = os.getenv("MONGODB_COLLECTION", "documents")
MONGODB_USERNAME = os.getenv("MONGODB_USERNAME", "")
MONGODB_PASSWORD = os.getenv("MONGODB_PASSWORD", "")
MONGODB_TIMEOUT_MS = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

# ───── RapidAPI (remote detector) ─────
RAPIDAPI_KEY = os.getenv("RAPIDAPI_KEY", "")
RAPIDAPI_HOST = os.getenv(
    "RAPIDAPI_HOST",
    "plagiarism-checker-and-auto-citation-generator-multi-lingual.p.rapidapi.com",
)
RAPIDAPI_URL = os.getenv("RAPIDAPI_URL", f"https://{RAPIDAPI_HOST}/plagiarism")
RAPIDAPI_LANGUAGE = os.getenv("RAPIDAPI_LANGUAGE", "en")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))

# ───── Similarity defaults ─────
DEFAULT_SHINGLE_SIZE = 3
MIN_SHINGLE_SIZE = 1
MAX_SHINGLE_SIZE = 10
DEFAULT_MIN_SIMILARITY = 0.7
SIMILARITY_DECIMALS = 4
MATCH_EXCERPT_LENGTH = 200
LOCAL_SOURCE_NAME = "Local Database"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "")


def get_mongo_credentials() -> MongoCredentials:
    if not MONGODB_URI:
        raise ConfigurationError("MongoDB credentials are required: set MONGODB_URI")
    return MongoCredentials(
        database_url=MONGODB_URI,
        database_name=MONGODB_DATABASE,
        collection_name=MONGODB_COLLECTION,
        username=MONGODB_USERNAME,
        password=MONGODB_PASSWORD,
    )


def get_rapidapi_credentials() -> RapidApiCredentials:
    if not RAPIDAPI_KEY:
        raise ConfigurationError("RapidAPI credentials are required: set RAPIDAPI_KEY")
    return RapidApiCredentials(api_key=RAPIDAPI_KEY)
