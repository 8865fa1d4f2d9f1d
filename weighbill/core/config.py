# weighbill/core/config.py
import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _split_csv(value: str) -> List[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


class Settings(BaseModel):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Weighbill Billing Panel")
    API_V1_STR: str = os.getenv("API_V1_STR", "/api")

    # CORS (env takes priority)
    BACKEND_CORS_ORIGINS: List[str] = _split_csv(
        os.getenv(
            "CORS_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173",
        ))

    # ---------- Remote persistence API ----------
    PANEL_API_BASE_URL: str = os.getenv("PANEL_API_BASE_URL",
                                        "http://127.0.0.1:5000/api")
    PANEL_API_TIMEOUT: float = float(os.getenv("PANEL_API_TIMEOUT", "15"))

    # ---------- Local store (payment records, attendance) ----------
    LOCAL_DB_URL: str = os.getenv("LOCAL_DB_URL", "sqlite:///./weighbill.db")

    # ---------- Inventory ----------
    # 50 KG
    LOW_STOCK_THRESHOLD_GRAMS: int = int(
        os.getenv("LOW_STOCK_THRESHOLD_GRAMS", "50000"))

    # ---------- Logging ----------
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "")


settings = Settings()
