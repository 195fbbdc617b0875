from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict

Severity = Literal["Low", "Medium", "High"]
SadeSatiPhase = Literal["Rising", "Peak", "Setting"]


# ─────────────────────────────────────────────
# Atomic Derived Facts
# ─────────────────────────────────────────────

class DoshaResult(BaseModel):
    """
    Represents a dosha and its presence.
    """
    model_config = ConfigDict(frozen=True)

    has_dosha: bool
    description: str
    severity: Optional[Severity] = None
    remedies: Optional[Tuple[str, ...]] = None


class SadeSatiStatus(BaseModel):
    """
    Saturn's transit relative to the natal Moon sign.
    """
    model_config = ConfigDict(frozen=True)

    is_active: bool
    description: str
    phase: Optional[SadeSatiPhase] = None
    next_period: Optional[str] = None
    moon_sign: Optional[str] = None
    saturn_sign: Optional[str] = None


# ─────────────────────────────────────────────
# Aggregated Derived Astrology
# ─────────────────────────────────────────────

class DoshaAnalysis(BaseModel):
    """
    Represents all dosha checks for one chart.
    """
    model_config = ConfigDict(frozen=True)

    mangal_dosha: DoshaResult
    kalsarp_dosha: DoshaResult
    pitra_dosha: DoshaResult
    sade_sati: SadeSatiStatus
