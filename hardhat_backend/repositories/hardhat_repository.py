from typing import Dict, Optional

from psycopg2 import sql

from config.database import Database

UPDATABLE_COLUMNS = ("nickname", "owner_name")


class HardHatRepository:
    def __init__(self, db: Database):
        self.db = db

    def update_hat(self, hat_id: int, changes: Dict[str, Optional[str]]) -> int:
        """Write the given display fields and return the affected row count."""
        columns = [name for name in UPDATABLE_COLUMNS if name in changes]
        if not columns:
            return 0

        query = sql.SQL("UPDATE hard_hats SET {} WHERE id = %s").format(
            sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(name)) for name in columns
            )
        )
        params = [changes[name] for name in columns] + [hat_id]

        with self.db.connection("update") as conn:
            cur = conn.cursor()
            cur.execute(query, params)
            return cur.rowcount
