import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse
from datetime import date

import structlog

from rental_bookings.db.engine import engine
from rental_bookings.logging_config import setup_logging
from rental_bookings.services.bookings import quote_booking
from rental_bookings.services.evaluator import RuleViolation

setup_logging()
logger = structlog.get_logger(__name__)


def main() -> None:
    """
    Print the price of a stay (or the rule it breaks) without booking it.

    Example:
        python scripts/quote_stay.py 12 2024-03-01 2024-03-05 --guests 2
    """
    parser = argparse.ArgumentParser(description="Quote a stay on a property")
    parser.add_argument("property_id", type=int)
    parser.add_argument("check_in", type=date.fromisoformat)
    parser.add_argument("check_out", type=date.fromisoformat)
    parser.add_argument("--guests", type=int, default=1)
    args = parser.parse_args()

    if args.check_out <= args.check_in:
        parser.error("check_out must be after check_in")

    result = quote_booking(
        engine,
        property_id=args.property_id,
        check_in=args.check_in,
        check_out=args.check_out,
        guests_count=args.guests,
    )

    if isinstance(result, RuleViolation):
        logger.warning("quote_rejected", rule=result.rule.value, message=result.message)
        sys.exit(1)

    logger.info(
        "quote",
        property_id=args.property_id,
        nights=result.nights,
        subtotal=str(result.subtotal),
        cleaning_fee=str(result.cleaning_fee),
        service_fee=str(result.service_fee),
        total_price=str(result.total_price),
    )


if __name__ == "__main__":
    main()
