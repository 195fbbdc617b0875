from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ─── App ──────────────────────────────
    APP_NAME: str = "kundali-core"
    ENV: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ─── Ephemeris ────────────────────────
    # Unset means the built-in Moshier model (no data files needed)
    EPHE_PATH: Optional[str] = None
    EPHEMERIS_MIN_YEAR: int = 1
    EPHEMERIS_MAX_YEAR: int = 2999

    # ─── Ascendant ────────────────────────
    POLAR_LATITUDE_LIMIT: float = 89.9

    # ─── Divisional ───────────────────────
    NAVAMSA_CONVENTION: Literal["parashari", "legacy_offset"] = "legacy_offset"

    CALCULATION_VERSION: str = "v1"


    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
