# hirelink/core/config.py
import os

from dotenv import load_dotenv


def str_to_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def merge_unique(items: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in items:
        if v in seen:
            continue
        seen.add(v)
        out.append(v)
    return out


class Settings:
    def __init__(self) -> None:
        self.ENV = os.getenv("ENV", "dev").strip().lower()  # dev | prod
        if self.ENV != "prod":
            # Load .env only for non-prod so prod can't be accidentally influenced by local files.
            load_dotenv()

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()

        # ----------------------------
        # Store
        # ----------------------------
        default_db = "" if self.ENV == "prod" else "sqlite:///./hirelink.db"
        self.DATABASE_URL = os.getenv("DATABASE_URL", default_db).strip()
        self.DB_AUTO_CREATE = str_to_bool(os.getenv("DB_AUTO_CREATE"), default=self.ENV != "prod")
        self.STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "10"))

        # ----------------------------
        # CORS
        # ----------------------------
        dev_defaults = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

        cors_from_env = parse_csv(os.getenv("CORS_ORIGINS"))
        if self.ENV == "prod":
            self.CORS_ORIGINS = merge_unique(cors_from_env)
        else:
            self.CORS_ORIGINS = merge_unique(cors_from_env + dev_defaults)

        # ----------------------------
        # Identity service (bearer token verification)
        # ----------------------------
        self.IDENTITY_SERVICE_URL = os.getenv("IDENTITY_SERVICE_URL", "").strip().rstrip("/")
        self.IDENTITY_SERVICE_API_KEY = os.getenv("IDENTITY_SERVICE_API_KEY", "")
        self.IDENTITY_SERVICE_TIMEOUT_SECONDS = float(os.getenv("IDENTITY_SERVICE_TIMEOUT_SECONDS", "5"))

        # ----------------------------
        # Job listing windows
        # ----------------------------
        # ALL_JOBS_UNFILTERED=false restricts /all-jobs to ALL_JOBS_MAX_AGE_DAYS.
        self.ALL_JOBS_UNFILTERED = str_to_bool(os.getenv("ALL_JOBS_UNFILTERED"), default=True)
        self.ALL_JOBS_MAX_AGE_DAYS = int(os.getenv("ALL_JOBS_MAX_AGE_DAYS", "30"))
        self.LATEST_JOBS_HOURS = int(os.getenv("LATEST_JOBS_HOURS", "24"))

        # ----------------------------
        # Login session tokens (optional)
        # ----------------------------
        self.JWT_SECRET = os.getenv("JWT_SECRET", "")
        self.JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
        self.ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

        # ----------------------------
        # Rate limiting
        # ----------------------------
        self.ENABLE_RATE_LIMITING = str_to_bool(os.getenv("ENABLE_RATE_LIMITING", "false"))
        self.AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "10/minute")

        self._validate_prod()

    def _validate_prod(self) -> None:
        if self.ENV != "prod":
            return

        missing: list[str] = []

        if not self.DATABASE_URL:
            missing.append("DATABASE_URL")
        if not self.IDENTITY_SERVICE_URL:
            missing.append("IDENTITY_SERVICE_URL")
        if not self.IDENTITY_SERVICE_API_KEY:
            missing.append("IDENTITY_SERVICE_API_KEY")
        if not self.CORS_ORIGINS:
            missing.append("CORS_ORIGINS")

        cors_joined = ",".join(self.CORS_ORIGINS)
        if "localhost" in cors_joined or "127.0.0.1" in cors_joined:
            raise RuntimeError("CORS_ORIGINS contains localhost/dev origins in prod")

        if self.IDENTITY_SERVICE_URL and not self.IDENTITY_SERVICE_URL.startswith("https://"):
            raise RuntimeError("IDENTITY_SERVICE_URL should be https://... in prod")

        if missing:
            raise RuntimeError(f"Missing required prod env vars: {', '.join(missing)}")

    @property
    def is_prod(self) -> bool:
        return self.ENV == "prod"

    @property
    def identity_user_url(self) -> str:
        if not self.IDENTITY_SERVICE_URL:
            return ""
        return f"{self.IDENTITY_SERVICE_URL}/auth/v1/user"


settings = Settings()
