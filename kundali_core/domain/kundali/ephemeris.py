import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

import swisseph as swe

from kundali_core.config import settings
from kundali_core.domain.kundali.errors import EphemerisRangeError
from kundali_core.domain.kundali.timescale import as_utc, julian_centuries, julian_day
from kundali_core.domain.kundali.zodiac import Body, normalize_degrees, signed_difference

logger = logging.getLogger(__name__)


# Classical bodies in chart order, with their Swiss Ephemeris ids
PLANET_MAPPING: Tuple[Tuple[Body, int], ...] = (
    (Body(id=0, name="Sun", full_name="Surya"), swe.SUN),
    (Body(id=1, name="Moon", full_name="Chandra"), swe.MOON),
    (Body(id=2, name="Mars", full_name="Mangal"), swe.MARS),
    (Body(id=3, name="Mercury", full_name="Budha"), swe.MERCURY),
    (Body(id=4, name="Jupiter", full_name="Guru"), swe.JUPITER),
    (Body(id=5, name="Venus", full_name="Shukra"), swe.VENUS),
    (Body(id=6, name="Saturn", full_name="Shani"), swe.SATURN),
)

RAHU = Body(id=7, name="Rahu", full_name="Rahu (North Node)")
KETU = Body(id=8, name="Ketu", full_name="Ketu (South Node)")

BODIES: Tuple[Body, ...] = tuple(body for body, _ in PLANET_MAPPING) + (RAHU, KETU)

# Mean nodes regress roughly 19.3° per year
NODE_SPEED = -0.053


def body_by_name(name: str) -> Body:
    for body in BODIES:
        if body.name == name:
            return body
    raise KeyError(name)


@dataclass(frozen=True)
class RawBodyPosition:
    """
    Tropical ecliptic position of one body, before any classification.
    """
    body: Body
    longitude: float
    latitude: float
    distance: float
    speed: float

    @property
    def is_retrograde(self) -> bool:
        return self.speed < 0


class EphemerisProvider:
    """
    Tropical ecliptic positions for the seven classical bodies
    and the mean lunar nodes.

    Body positions come from Swiss Ephemeris; the nodes are computed
    from the mean-node polynomial so that they do not depend on the
    ephemeris files in use.
    """

    def __init__(
        self,
        ephe_path: Optional[str] = None,
        min_year: Optional[int] = None,
        max_year: Optional[int] = None,
    ):
        ephe_path = ephe_path if ephe_path is not None else settings.EPHE_PATH
        self.min_year = min_year if min_year is not None else settings.EPHEMERIS_MIN_YEAR
        self.max_year = max_year if max_year is not None else settings.EPHEMERIS_MAX_YEAR

        if ephe_path:
            swe.set_ephe_path(ephe_path)
            self.flags = swe.FLG_SWIEPH
        else:
            # Built-in Moshier model, no data files required
            self.flags = swe.FLG_MOSEPH

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def check_range(self, instant: datetime) -> datetime:
        """
        Return the instant as aware UTC, or fail if the model does not cover it.
        """
        dt = as_utc(instant)
        if not self.min_year <= dt.year <= self.max_year:
            logger.warning(
                "Instant %s outside supported ephemeris range %s-%s",
                dt.isoformat(), self.min_year, self.max_year,
            )
            raise EphemerisRangeError(
                f"Instant {dt.isoformat()} is outside the supported ephemeris "
                f"range ({self.min_year}-{self.max_year})"
            )
        return dt

    def body_positions(self, instant: datetime) -> List[RawBodyPosition]:
        """
        Tropical positions of Sun … Saturn at a UTC instant.

        Speed is the signed one-day change in longitude.
        """
        dt = self.check_range(instant)
        jd = julian_day(dt)

        positions: List[RawBodyPosition] = []
        for body, pid in PLANET_MAPPING:
            lon, lat = self._ecliptic(jd, pid)
            next_lon, _ = self._ecliptic(jd + 1.0, pid)

            positions.append(
                RawBodyPosition(
                    body=body,
                    longitude=lon,
                    latitude=lat,
                    distance=self._helio_distance(jd, body, pid),
                    speed=signed_difference(next_lon, lon),
                )
            )
            logger.debug("%s tropical %.4f°", body.name, lon)

        return positions

    def lunar_nodes(self, instant: datetime) -> Tuple[RawBodyPosition, RawBodyPosition]:
        """
        Mean Rahu (ascending node) and Ketu (Rahu + 180°), tropical.
        """
        dt = self.check_range(instant)
        t = julian_centuries(julian_day(dt))

        omega = (
            125.04452
            - 1934.136261 * t
            + 0.0020708 * t * t
            + t * t * t / 450000.0
        )
        rahu_lon = normalize_degrees(omega)
        ketu_lon = normalize_degrees(rahu_lon + 180.0)

        rahu = RawBodyPosition(
            body=RAHU, longitude=rahu_lon, latitude=0.0, distance=0.0, speed=NODE_SPEED,
        )
        ketu = RawBodyPosition(
            body=KETU, longitude=ketu_lon, latitude=0.0, distance=0.0, speed=NODE_SPEED,
        )
        return rahu, ketu

    def all_positions(self, instant: datetime) -> List[RawBodyPosition]:
        return [*self.body_positions(instant), *self.lunar_nodes(instant)]

    # ─────────────────────────────────────────────
    # Swiss Ephemeris calls
    # ─────────────────────────────────────────────

    def _calc(self, jd: float, pid: int, flags: int) -> Tuple[float, ...]:
        try:
            xx, _ = swe.calc_ut(jd, pid, flags)
        except swe.Error as e:
            logger.error(f"Swiss Ephemeris failed for body {pid} at JD {jd}: {e}")
            raise EphemerisRangeError(
                f"Ephemeris calculation failed at JD {jd}: {e}"
            ) from e
        return xx

    def _ecliptic(self, jd: float, pid: int) -> Tuple[float, float]:
        xx = self._calc(jd, pid, self.flags)
        return normalize_degrees(xx[0]), xx[1]

    def _helio_distance(self, jd: float, body: Body, pid: int) -> float:
        if body.name == "Sun":
            return 0.0
        xx = self._calc(jd, pid, self.flags | swe.FLG_HELCTR)
        return xx[2]
