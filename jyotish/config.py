from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ─── Ephemeris ────────────────────────
    EPHEMERIS_PATH: Optional[str] = None
    AYANAMSA: str = "Lahiri"
    COORDINATE_SYSTEM: str = "sidereal"
    HOUSE_SYSTEM: str = "P"

    # ─── Derivation ───────────────────────
    CONJUNCTION_ORB: float = 10.0
    DASHA_YEAR_DAYS: float = 365.25


    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
