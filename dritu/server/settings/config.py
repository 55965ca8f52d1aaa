from typing import List

from pydantic import BaseModel
from dotenv import load_dotenv
import os

load_dotenv()


def _csv(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings(BaseModel):
    app_name: str = "Dritu Enterprise - Business Management Dashboard"
    environment: str = os.getenv("ENVIRONMENT", "dev")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./dritu.db")
    debug: bool = os.getenv("DEBUG", "0") == "1"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    seed_on_startup: bool = os.getenv("SEED_ON_STARTUP", "1") == "1"
    cors_origins: List[str] = _csv(os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"))

    # Pricing / quotations
    gst_rate: float = float(os.getenv("GST_RATE", "18"))
    quotation_validity_days: int = int(os.getenv("QUOTATION_VALIDITY_DAYS", "30"))
    quotation_prefix: str = os.getenv("QUOTATION_PREFIX", "QT")

    # Company profile used on quotation documents
    company_name: str = os.getenv("COMPANY_NAME", "DRITU ENTERPRISE")
    company_address: str = os.getenv("COMPANY_ADDRESS", "123 Business Park, Mumbai - 400001")
    company_phone: str = os.getenv("COMPANY_PHONE", "+91 9876543210")
    company_email: str = os.getenv("COMPANY_EMAIL", "info@dritu.com")

settings = Settings()
