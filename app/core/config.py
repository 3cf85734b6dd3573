import os
from dataclasses import dataclass, field
from typing import Optional

from dateutil.relativedelta import relativedelta
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./instructors.db")
    GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY")
    GEOCODER_TIMEOUT = float(os.getenv("GEOCODER_TIMEOUT", 10))
    INSTRUCTOR_TABLE = os.getenv("INSTRUCTOR_TABLE", "instructors")
    TESTIMONIAL_TABLE = os.getenv("TESTIMONIAL_TABLE", "testimonials")
    PRIORITY_PERIOD_MONTHS = int(os.getenv("PRIORITY_PERIOD_MONTHS", 3))
    DISPLAY_TESTIMONIALS = _as_bool(os.getenv("DISPLAY_TESTIMONIALS", "false"))
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "jwt-secret")
    JWT_ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 15))
    REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", 7))
    PASSWORD_RESET_EXPIRE_HOURS = int(os.getenv("PASSWORD_RESET_EXPIRE_HOURS", 24))
    MAX_LOGIN_ATTEMPTS = int(os.getenv("MAX_LOGIN_ATTEMPTS", 5))
    LOGIN_ATTEMPT_WINDOW_MINUTES = int(os.getenv("LOGIN_ATTEMPT_WINDOW_MINUTES", 30))
    ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH")

settings = Settings()


@dataclass
class AccountTables:
    users: str
    attempts: str
    requests: str
    sessions: str

    @classmethod
    def for_table(cls, table: str) -> "AccountTables":
        return cls(users=table, attempts=f"{table}_attempts", requests=f"{table}_requests", sessions=f"{table}_sessions")


@dataclass
class DirectoryConfig:
    instructor_table: str = "instructors"
    testimonial_table: str = "testimonials"
    priority_period: relativedelta = field(default_factory=lambda: relativedelta(months=3))
    display_testimonials: bool = False
    api_key: Optional[str] = None

    @property
    def tables(self) -> AccountTables:
        return AccountTables.for_table(self.instructor_table)

    @classmethod
    def from_settings(cls, s: Settings = settings) -> "DirectoryConfig":
        return cls(
            instructor_table=s.INSTRUCTOR_TABLE,
            testimonial_table=s.TESTIMONIAL_TABLE,
            priority_period=relativedelta(months=s.PRIORITY_PERIOD_MONTHS),
            display_testimonials=s.DISPLAY_TESTIMONIALS,
            api_key=s.GOOGLE_MAPS_API_KEY,
        )
