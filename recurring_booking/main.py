import logging

from recurring_booking.core.log_context import configure_logging
from recurring_booking.wiring.dependencies import get_container

configure_logging()

# Transports import `container` and call its use cases.
container = get_container()


def main() -> None:
    logger = logging.getLogger(__name__)
    logger.info("Recurring booking scheduler ready: %s", ", ".join(sorted(container)))


if __name__ == "__main__":
    main()
