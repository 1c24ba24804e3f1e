import os
from dotenv import load_dotenv
load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///ratings.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    # end_to_end | per_step
    SCORE_ROUNDING_MODE = os.getenv("SCORE_ROUNDING_MODE", "end_to_end")
    RATING_LOGS_PAGE_LIMIT = int(os.getenv("RATING_LOGS_PAGE_LIMIT", "100"))
    RATING_LOGS_MAX_LIMIT = int(os.getenv("RATING_LOGS_MAX_LIMIT", "1000"))
    AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "0") == "1"


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    AUTO_CREATE_TABLES = True
    LOG_LEVEL = "DEBUG"
    SCORE_ROUNDING_MODE = "end_to_end"
