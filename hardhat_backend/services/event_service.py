import logging
from typing import List, Optional

from config.database import Database
from models.errors import MissingField
from models.request_models import ImpactReading
from models.response_models import EventSnapshot, EventWithOwner, ImpactRecordedResponse
from repositories.event_repository import EventRepository
from services.normalizer import coerce_reading, normalize_impact, normalize_light

logger = logging.getLogger(__name__)


class EventService:
    def __init__(self, db: Database):
        self.events = EventRepository(db)

    def record_event(self, hat_id: int, reading: ImpactReading) -> ImpactRecordedResponse:
        missing = reading.missing_fields()
        if missing:
            raise MissingField(*missing)

        impact = normalize_impact(reading.impact)
        light_state = normalize_light(reading.light)

        event_id = self.events.insert_event(
            hat_id,
            impact,
            light_state,
            coerce_reading(reading.g_force),
            coerce_reading(reading.light_raw)
        )

        logger.info("Recorded event %s for hat %s: impact=%s light=%s",
                    event_id, hat_id, impact, light_state)

        return ImpactRecordedResponse(
            message="Impact event recorded",
            event_id=event_id,
            impact=impact,
            light_state=light_state
        )

    def get_latest(self, hat_id: int) -> Optional[EventSnapshot]:
        row = self.events.get_latest(hat_id)
        return EventSnapshot(**row) if row else None

    def clear_events(self, hat_id: int, all_hats: bool = False) -> int:
        if all_hats:
            deleted = self.events.delete_all_events()
        else:
            deleted = self.events.delete_events(hat_id)

        logger.info("Cleared %s events (%s)", deleted,
                    "all hats" if all_hats else f"hat {hat_id}")
        return deleted

    def list_events_with_owner(self, hat_id: Optional[int] = None) -> List[EventWithOwner]:
        return [EventWithOwner(**row) for row in self.events.list_events_with_owner(hat_id)]
