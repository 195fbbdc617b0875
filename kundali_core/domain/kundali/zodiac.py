import math
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


# ─────────────────────────────────────────────
# Fixed Lookup Records
# ─────────────────────────────────────────────

class Sign(BaseModel):
    """
    One of the twelve sidereal zodiac signs.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, le=12)
    name: str
    sanskrit: str
    lord: str


class Nakshatra(BaseModel):
    """
    One of the 27 lunar mansions, each spanning 13°20′.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, le=27)
    name: str
    lord: str
    deity: str
    description: str


class Body(BaseModel):
    """
    Identity of a charted body (seven classical planets + lunar nodes).
    """
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    full_name: str


class ZodiacPlacement(BaseModel):
    """
    Classification of one sidereal longitude.
    """
    model_config = ConfigDict(frozen=True)

    longitude: float
    sign: Sign
    local_degree: float
    nakshatra: Nakshatra
    pada: int
    degree_in_nakshatra: float


# ─────────────────────────────────────────────
# Tables
# ─────────────────────────────────────────────

SIGN_SPAN = 30.0
NAKSHATRA_SPAN = 360.0 / 27.0  # 13.333333...
PADA_SPAN = NAKSHATRA_SPAN / 4.0

SIGNS: Tuple[Sign, ...] = tuple(
    Sign(id=i + 1, name=name, sanskrit=sanskrit, lord=lord)
    for i, (name, sanskrit, lord) in enumerate([
        ("Aries", "Mesha", "Mars"),
        ("Taurus", "Vrishabha", "Venus"),
        ("Gemini", "Mithuna", "Mercury"),
        ("Cancer", "Karka", "Moon"),
        ("Leo", "Simha", "Sun"),
        ("Virgo", "Kanya", "Mercury"),
        ("Libra", "Tula", "Venus"),
        ("Scorpio", "Vrishchika", "Mars"),
        ("Sagittarius", "Dhanu", "Jupiter"),
        ("Capricorn", "Makara", "Saturn"),
        ("Aquarius", "Kumbha", "Saturn"),
        ("Pisces", "Meena", "Jupiter"),
    ])
)

# Vimshottari order; nakshatra i is ruled by DASHA_LORDS[i % 9]
DASHA_LORDS: Tuple[str, ...] = (
    "Ketu", "Venus", "Sun", "Moon", "Mars",
    "Rahu", "Jupiter", "Saturn", "Mercury",
)

NAKSHATRAS: Tuple[Nakshatra, ...] = tuple(
    Nakshatra(
        id=i + 1,
        name=name,
        lord=DASHA_LORDS[i % 9],
        deity=deity,
        description=description,
    )
    for i, (name, deity, description) in enumerate([
        ("Ashwini", "Ashwini Kumaras",
         "Swift, healing energy. Associated with vitality and spontaneous action."),
        ("Bharani", "Yama",
         "Creative transformation. Rules over birth, death, and nurturing."),
        ("Krittika", "Agni",
         "Sharp intellect and cutting through illusion. Purification and clarity."),
        ("Rohini", "Brahma",
         "Growth, beauty, and material abundance. Creative and nurturing."),
        ("Mrigashira", "Soma",
         "Seeking and searching. Curious, gentle, and explorative nature."),
        ("Ardra", "Rudra",
         "Storm and transformation. Brings change through destruction and renewal."),
        ("Punarvasu", "Aditi",
         "Return to light. Renewal, restoration, and spiritual wisdom."),
        ("Pushya", "Brihaspati",
         "Nourishment and growth. Most auspicious for new beginnings."),
        ("Ashlesha", "Serpents",
         "Mystical and secretive. Deep wisdom and serpent energy."),
        ("Magha", "Pitris",
         "Royal authority and ancestral power. Leadership and legacy."),
        ("Purva Phalguni", "Bhaga",
         "Enjoyment and creativity. Love, beauty, and artistic expression."),
        ("Uttara Phalguni", "Aryaman",
         "Service and partnership. Generous and helpful nature."),
        ("Hasta", "Savitar",
         "Skillful hands. Dexterity, craftsmanship, and manifesting ability."),
        ("Chitra", "Tvashtar",
         "Beauty and design. Creative visualization and artistic brilliance."),
        ("Swati", "Vayu",
         "Independence and flexibility. Freedom-loving and diplomatic."),
        ("Vishakha", "Indra-Agni",
         "Goal-oriented and determined. Focused ambition and achievement."),
        ("Anuradha", "Mitra",
         "Friendship and devotion. Loyal, organized, and spiritual."),
        ("Jyeshtha", "Indra",
         "Chief star. Seniority, protection, and powerful energy."),
        ("Mula", "Nirriti",
         "Root and foundation. Deep investigation and transformation."),
        ("Purva Ashadha", "Apas",
         "Invincible energy. Optimism and purification."),
        ("Uttara Ashadha", "Vishvadevas",
         "Final victory. Permanent success and righteous leadership."),
        ("Shravana", "Vishnu",
         "Listening and learning. Knowledge, wisdom, and communication."),
        ("Dhanishta", "Vasus",
         "Wealth and prosperity. Musical and rhythmic nature."),
        ("Shatabhisha", "Varuna",
         "Hundred healers. Healing power and mystical knowledge."),
        ("Purva Bhadrapada", "Aja Ekapada",
         "Spiritual fire. Transformation through intensity."),
        ("Uttara Bhadrapada", "Ahir Budhnya",
         "Deep wisdom. Compassion and spiritual depth."),
        ("Revati", "Pushan",
         "Wealth and journey completion. Nourishment and protection."),
    ])
)


# ─────────────────────────────────────────────
# Angle helpers
# ─────────────────────────────────────────────

def normalize_degrees(value: float) -> float:
    """
    Reduce an angle into [0, 360).
    """
    if not math.isfinite(value):
        raise ValueError(f"Longitude must be finite, got {value!r}")
    result = value % 360.0
    # -1e-17 % 360.0 rounds to 360.0
    if result >= 360.0:
        result = 0.0
    return result


def signed_difference(a: float, b: float) -> float:
    """
    a - b folded into (-180, 180].
    """
    diff = (a - b) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff


def angular_separation(a: float, b: float) -> float:
    """
    Shortest arc between two longitudes, in [0, 180].
    """
    diff = abs(a - b) % 360.0
    return 360.0 - diff if diff > 180.0 else diff


# ─────────────────────────────────────────────
# Classifier
# ─────────────────────────────────────────────

def sign_index(longitude: float) -> int:
    """
    0-based sign index (Aries=0 … Pisces=11).
    """
    return min(int(normalize_degrees(longitude) // SIGN_SPAN), 11)


def sign_for(longitude: float) -> Sign:
    return SIGNS[sign_index(longitude)]


def nakshatra_index(longitude: float) -> int:
    """
    0-based nakshatra index (Ashwini=0 … Revati=26).
    """
    return min(int(normalize_degrees(longitude) // NAKSHATRA_SPAN), 26)


def nakshatra_for(longitude: float) -> Nakshatra:
    return NAKSHATRAS[nakshatra_index(longitude)]


def nakshatra_lord_index(index: int) -> int:
    """
    Position in DASHA_LORDS of the lord of a 0-based nakshatra index.
    """
    return index % 9


def classify(longitude: float) -> ZodiacPlacement:
    """
    Classify a sidereal longitude into sign, nakshatra and pada.

    Sign and nakshatra are independent partitions of the same circle.
    """
    lon = normalize_degrees(longitude)

    s_index = sign_index(lon)
    n_index = nakshatra_index(lon)

    degree_within_nakshatra = max(lon - n_index * NAKSHATRA_SPAN, 0.0)
    pada = min(int(degree_within_nakshatra // PADA_SPAN), 3) + 1

    return ZodiacPlacement(
        longitude=lon,
        sign=SIGNS[s_index],
        local_degree=lon - s_index * SIGN_SPAN,
        nakshatra=NAKSHATRAS[n_index],
        pada=pada,
        degree_in_nakshatra=degree_within_nakshatra,
    )
