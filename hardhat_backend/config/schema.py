import logging

from config.database import Database
from config.logging_config import configure_logging
from config.settings import DEFAULT_HAT_ID, Settings

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS hard_hats (
    id SERIAL PRIMARY KEY,
    nickname TEXT,
    owner_name TEXT
);
CREATE TABLE IF NOT EXISTS impact_events (
    id SERIAL PRIMARY KEY,
    hat_id INTEGER NOT NULL REFERENCES hard_hats(id),
    impact INTEGER NOT NULL,
    light_state TEXT NOT NULL,
    g_force NUMERIC NULL,
    light_raw NUMERIC NULL,
    created_at TIMESTAMP NOT NULL DEFAULT now()
);
CREATE INDEX IF NOT EXISTS impact_events_hat_created_idx
    ON impact_events (hat_id, created_at DESC);
"""


def init_schema(db: Database, hat_id: int = DEFAULT_HAT_ID) -> None:
    """Create the tables if missing and make sure the hat row exists."""
    with db.connection("schema") as conn:
        cur = conn.cursor()
        cur.execute(SCHEMA)
        cur.execute(
            "INSERT INTO hard_hats (id, nickname, owner_name) VALUES (%s, %s, %s) "
            "ON CONFLICT (id) DO NOTHING",
            (hat_id, "Hard Hat", None)
        )
        cur.execute(
            "SELECT setval(pg_get_serial_sequence('hard_hats', 'id'), "
            "(SELECT MAX(id) FROM hard_hats))"
        )


if __name__ == "__main__":
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    database = Database(settings)
    try:
        init_schema(database)
        logger.info("Schema ready for hat %s", DEFAULT_HAT_ID)
    finally:
        database.close()
