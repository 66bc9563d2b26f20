import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel

# Force-load .env (Windows-safe, reload-safe)
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH)

DEFAULT_APP_URL = "https://app.ciiready.co.uk"
DEFAULT_FROM_EMAIL = "CIIReady <hello@ciiready.co.uk>"
DEFAULT_SUPPORT_EMAIL = "hello@ciiready.co.uk"


class Settings(BaseModel):
    stripe_secret_key: Optional[str] = None
    resend_api_key: Optional[str] = None
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    app_url: str = DEFAULT_APP_URL
    from_email: str = DEFAULT_FROM_EMAIL
    support_email: str = DEFAULT_SUPPORT_EMAIL
    log_level: str = "INFO"

    @property
    def store_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


def get_settings() -> Settings:
    """Read configuration from the environment on every call."""
    return Settings(
        stripe_secret_key=os.getenv("STRIPE_SECRET_KEY"),
        resend_api_key=os.getenv("RESEND_API_KEY"),
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_key=os.getenv("SUPABASE_ANON_KEY"),
        app_url=os.getenv("APP_URL") or DEFAULT_APP_URL,
        from_email=os.getenv("FROM_EMAIL") or DEFAULT_FROM_EMAIL,
        support_email=os.getenv("SUPPORT_EMAIL") or DEFAULT_SUPPORT_EMAIL,
        log_level=os.getenv("LOG_LEVEL") or "INFO",
    )
