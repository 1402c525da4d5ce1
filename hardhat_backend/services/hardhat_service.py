import logging

from config.database import Database
from models.request_models import HardHatUpdate
from repositories.hardhat_repository import HardHatRepository

logger = logging.getLogger(__name__)


class HardHatService:
    def __init__(self, db: Database):
        self.hats = HardHatRepository(db)

    def update_hat(self, hat_id: int, update: HardHatUpdate) -> bool:
        changes = update.changes()
        if not changes:
            return True

        affected = self.hats.update_hat(hat_id, changes)
        if affected == 0:
            # No existence check: callers still get success.
            logger.warning("Hat %s not found, profile update matched no rows", hat_id)
        else:
            logger.info("Updated hat %s: %s", hat_id, ", ".join(sorted(changes)))
        return True
