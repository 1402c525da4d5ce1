from typing import Dict, List, Optional

from config.database import Database


class EventRepository:
    def __init__(self, db: Database):
        self.db = db

    def insert_event(self, hat_id: int, impact: int, light_state: str,
                     g_force: Optional[float], light_raw: Optional[float]) -> int:
        with self.db.connection("insert") as conn:
            cur = conn.cursor()
            cur.execute("""
                INSERT INTO impact_events
                (hat_id, impact, light_state, g_force, light_raw)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING id
            """, (hat_id, impact, light_state, g_force, light_raw))

            return cur.fetchone()['id']

    def get_latest(self, hat_id: int) -> Optional[Dict]:
        with self.db.connection("read") as conn:
            cur = conn.cursor()
            cur.execute("""
                SELECT impact, light_state, g_force, light_raw, created_at
                FROM impact_events
                WHERE hat_id = %s
                ORDER BY created_at DESC, id DESC
                LIMIT 1
            """, (hat_id,))

            result = cur.fetchone()
            return dict(result) if result else None

    def delete_events(self, hat_id: int) -> int:
        with self.db.connection("delete") as conn:
            cur = conn.cursor()
            cur.execute("DELETE FROM impact_events WHERE hat_id = %s", (hat_id,))
            return cur.rowcount

    def delete_all_events(self) -> int:
        with self.db.connection("delete") as conn:
            cur = conn.cursor()
            cur.execute("DELETE FROM impact_events")
            return cur.rowcount

    def list_events_with_owner(self, hat_id: Optional[int] = None) -> List[Dict]:
        query = """
            SELECT h.nickname, h.owner_name, e.impact, e.light_state,
                   e.g_force, e.created_at
            FROM impact_events e
            JOIN hard_hats h ON h.id = e.hat_id
        """
        params = ()
        if hat_id is not None:
            query += " WHERE e.hat_id = %s"
            params = (hat_id,)
        query += " ORDER BY e.created_at DESC, e.id DESC"

        with self.db.connection("read") as conn:
            cur = conn.cursor()
            cur.execute(query, params)
            return [dict(row) for row in cur.fetchall()]
