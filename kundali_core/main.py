import argparse
import json
import logging
import sys
from typing import List, Optional

from kundali_core.config import settings
from kundali_core.domain.kundali.converters import chart_to_payload
from kundali_core.domain.kundali.engine import BirthInstant, KundaliEngine, parse_instant
from kundali_core.domain.kundali.errors import KundaliError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=settings.APP_NAME,
        description="Compute a Vedic birth chart and print it as JSON.",
    )
    parser.add_argument("--datetime", required=True, dest="instant",
                        help="birth instant, e.g. 1990-01-15T14:30:00 (UTC unless an offset is given)")
    parser.add_argument("--lat", type=float, required=True, help="latitude in degrees, north positive")
    parser.add_argument("--lon", type=float, required=True, help="longitude in degrees, east positive")
    parser.add_argument("--as-of", dest="as_of", default=None,
                        help="instant at which dasha and Sade Sati are evaluated (default: now)")
    parser.add_argument("--indent", type=int, default=2)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        birth = BirthInstant.from_iso(args.instant, args.lat, args.lon)
        as_of = parse_instant(args.as_of) if args.as_of else None
        chart = KundaliEngine().generate(birth, as_of)
    except KundaliError as e:
        logger.debug("Chart computation failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(chart_to_payload(chart), indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
