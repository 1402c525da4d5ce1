from unittest.mock import MagicMock
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.schema import SCHEMA, init_schema


class TestInitSchema:

    def test_creates_tables_and_seeds_hat(self):
        db = MagicMock()
        cur = db.connection.return_value.__enter__.return_value.cursor.return_value

        init_schema(db)

        statements = [call[0][0] for call in cur.execute.call_args_list]
        assert statements[0] == SCHEMA
        assert "ON CONFLICT (id) DO NOTHING" in statements[1]
        assert cur.execute.call_args_list[1][0][1][0] == 1

    def test_schema_matches_stored_columns(self):
        for column in ("hat_id INTEGER", "impact INTEGER", "light_state TEXT",
                       "g_force NUMERIC NULL", "light_raw NUMERIC NULL",
                       "created_at TIMESTAMP NOT NULL DEFAULT now()"):
            assert column in SCHEMA
        assert "REFERENCES hard_hats(id)" in SCHEMA
