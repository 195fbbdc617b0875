from datetime import datetime
from typing import Any, Dict, List

from kundali_core.domain.kundali.dasha.schemas import DashaPeriod
from kundali_core.domain.kundali.schemas import (
    AscendantInfo,
    CompleteBirthChart,
    EnhancedPlanetPosition,
)
from kundali_core.domain.kundali.zodiac import Sign


# ─────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────

def _date(value: datetime) -> str:
    return value.date().isoformat()


def _sign(sign: Sign) -> Dict[str, Any]:
    return {"id": sign.id, "name": sign.name, "lord": sign.lord}


def _ascendant(ascendant: AscendantInfo) -> Dict[str, Any]:
    return {
        "sign": _sign(ascendant.sign),
        "degree": ascendant.degree,
        "absolute_degree": ascendant.absolute_degree,
        "nakshatra": {
            "id": ascendant.nakshatra.id,
            "name": ascendant.nakshatra.name,
            "pada": ascendant.pada,
            "lord": ascendant.nakshatra.lord,
        },
    }


def _planet(planet: EnhancedPlanetPosition) -> Dict[str, Any]:
    return {
        "id": planet.body.id,
        "name": planet.name,
        "full_name": planet.full_name,
        "local_degree": planet.local_degree,
        "global_degree": planet.sidereal_longitude,
        "sign": _sign(planet.sign),
        "nakshatra": {
            "id": planet.nakshatra.id,
            "name": planet.nakshatra.name,
            "pada": planet.pada,
            "lord": planet.nakshatra_lord,
            "deity": planet.nakshatra.deity,
            "description": planet.nakshatra.description,
        },
        "nakshatra_lord": planet.nakshatra_lord,
        "house": planet.house,
        "is_retrograde": planet.is_retrograde,
        "speed": planet.speed,
        "navamsa_sign": _sign(planet.navamsa_sign),
        "navamsa_degree": planet.navamsa_degree,
        "is_vargottama": planet.is_vargottama,
        "is_combust": planet.is_combust,
    }


def _period(period: DashaPeriod, with_years: bool = False) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "planet": period.planet,
        "start": _date(period.start),
        "end": _date(period.end),
    }
    if with_years:
        data["years"] = period.years
    return data


# ─────────────────────────────────────────────
# Domain → payload
# ─────────────────────────────────────────────

def chart_to_payload(chart: CompleteBirthChart) -> Dict[str, Any]:
    """
    Convert a CompleteBirthChart into JSON-ready primitives for
    display and storage layers.
    """
    ascendant = _ascendant(chart.ascendant)
    planets: List[Dict[str, Any]] = [_planet(p) for p in chart.planets]
    dasha = chart.vimshottari_dasha

    return {
        "birth_details": {
            "birth_instant": chart.birth_instant.isoformat(),
            "latitude": chart.latitude,
            "longitude": chart.longitude,
            "as_of": chart.as_of.isoformat(),
            "julian_day": chart.julian_day,
            "ayanamsa": chart.ayanamsa,
            "timezone": "UTC",
        },
        "kundli": {
            "ascendant": ascendant,
            "planets": planets,
        },
        "advanced_kundli": {
            "ascendant": ascendant,
            "houses": [
                {
                    "number": house.number,
                    "sign": _sign(house.sign),
                    "cusp_degree": house.cusp_degree,
                    "planets": list(house.planets),
                }
                for house in chart.houses
            ],
            "navamsa": chart.navamsa.model_dump(mode="json"),
            "vimshottari_dasha": {
                "birth_moon_nakshatra": dasha.birth_moon_nakshatra,
                "birth_moon_nakshatra_lord": dasha.birth_moon_nakshatra_lord,
                "balance_at_birth": dasha.balance_at_birth,
                "maha_dasha": _period(dasha.maha_dasha),
                "antar_dasha": _period(dasha.antar_dasha),
                "pratyantar_dasha": _period(dasha.pratyantar_dasha),
                "all_maha_dashas": [
                    _period(p, with_years=True) for p in dasha.all_maha_dashas
                ],
            },
            "doshas": chart.doshas.model_dump(mode="json"),
        },
        "calculation_version": chart.calculation_version,
    }
