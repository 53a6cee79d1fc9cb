from dataclasses import dataclass

from recurring_booking.application.exceptions import SeriesNotFoundError
from recurring_booking.application.ports.booking_store import BookingStorePort
from recurring_booking.domain.entities.recurring_series import SeriesDetail


@dataclass
class GetSeriesUseCase:
    store: BookingStorePort

    def execute(self, business_id: str, series_id: str) -> SeriesDetail:
        detail = self.store.get_series_detail(business_id, series_id)
        if detail is None:
            raise SeriesNotFoundError("Recurring series not found")
        return detail
