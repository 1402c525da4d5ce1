import pytest
from unittest.mock import patch, MagicMock
from datetime import datetime
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.errors import MissingField
from models.request_models import HardHatUpdate, ImpactReading
from services.event_service import EventService
from services.hardhat_service import HardHatService


class TestRecordEvent:

    @patch('services.event_service.EventRepository')
    def test_normalizes_before_insert(self, mock_event_repo):
        repo = mock_event_repo.return_value
        repo.insert_event.return_value = 7

        result = EventService(MagicMock()).record_event(
            1, ImpactReading(impact="Severe", light=" Dark ", g_force="3.5", light_raw="n/a")
        )

        repo.insert_event.assert_called_once_with(1, 3, "dark", 3.5, None)
        assert result.event_id == 7
        assert result.impact == 3
        assert result.light_state == "dark"

    @pytest.mark.parametrize("body, missing", [
        ({"light": "dark"}, ("impact",)),
        ({"impact": 2}, ("light",)),
        ({}, ("impact", "light")),
    ])
    @patch('services.event_service.EventRepository')
    def test_missing_fields_persist_nothing(self, mock_event_repo, body, missing):
        with pytest.raises(MissingField) as exc_info:
            EventService(MagicMock()).record_event(1, ImpactReading(**body))

        assert exc_info.value.fields == missing
        mock_event_repo.return_value.insert_event.assert_not_called()

    @patch('services.event_service.EventRepository')
    def test_explicit_null_is_present_not_missing(self, mock_event_repo):
        mock_event_repo.return_value.insert_event.return_value = 1

        result = EventService(MagicMock()).record_event(1, ImpactReading(impact=None, light=None))

        assert result.impact == 0
        assert result.light_state == "none"


class TestLatestAndHistory:

    @patch('services.event_service.EventRepository')
    def test_latest_returns_snapshot(self, mock_event_repo):
        created = datetime(2025, 3, 1, 12, 30)
        mock_event_repo.return_value.get_latest.return_value = {
            'impact': 2, 'light_state': 'bright', 'g_force': None,
            'light_raw': 840, 'created_at': created
        }

        snapshot = EventService(MagicMock()).get_latest(1)

        assert snapshot.impact == 2
        assert snapshot.light_raw == 840.0
        assert snapshot.created_at == created
        mock_event_repo.return_value.get_latest.assert_called_once_with(1)

    @patch('services.event_service.EventRepository')
    def test_latest_without_events_is_none(self, mock_event_repo):
        mock_event_repo.return_value.get_latest.return_value = None

        assert EventService(MagicMock()).get_latest(1) is None

    @patch('services.event_service.EventRepository')
    def test_clear_single_hat(self, mock_event_repo):
        mock_event_repo.return_value.delete_events.return_value = 4

        assert EventService(MagicMock()).clear_events(1) == 4
        mock_event_repo.return_value.delete_events.assert_called_once_with(1)
        mock_event_repo.return_value.delete_all_events.assert_not_called()

    @patch('services.event_service.EventRepository')
    def test_clear_all_hats(self, mock_event_repo):
        mock_event_repo.return_value.delete_all_events.return_value = 0

        assert EventService(MagicMock()).clear_events(1, all_hats=True) == 0
        mock_event_repo.return_value.delete_events.assert_not_called()

    @patch('services.event_service.EventRepository')
    def test_listing_keeps_repository_order(self, mock_event_repo):
        mock_event_repo.return_value.list_events_with_owner.return_value = [
            {'nickname': 'Hatty', 'owner_name': 'Sam', 'impact': 1, 'light_state': 'dark',
             'g_force': 1.2, 'created_at': datetime(2025, 3, 2)},
            {'nickname': 'Hatty', 'owner_name': 'Sam', 'impact': 3, 'light_state': 'none',
             'g_force': None, 'created_at': datetime(2025, 3, 1)},
        ]

        rows = EventService(MagicMock()).list_events_with_owner()

        assert [r.impact for r in rows] == [1, 3]
        assert rows[0].owner_name == "Sam"
        mock_event_repo.return_value.list_events_with_owner.assert_called_once_with(None)


class TestUpdateHat:

    @patch('services.hardhat_service.HardHatRepository')
    def test_writes_only_sent_fields(self, mock_hat_repo):
        mock_hat_repo.return_value.update_hat.return_value = 1

        assert HardHatService(MagicMock()).update_hat(1, HardHatUpdate(nickname="Big Blue")) is True
        mock_hat_repo.return_value.update_hat.assert_called_once_with(1, {"nickname": "Big Blue"})

    @patch('services.hardhat_service.HardHatRepository')
    def test_missing_hat_still_reports_success(self, mock_hat_repo):
        mock_hat_repo.return_value.update_hat.return_value = 0

        assert HardHatService(MagicMock()).update_hat(1, HardHatUpdate(owner_name="Ana")) is True

    @patch('services.hardhat_service.HardHatRepository')
    def test_empty_update_skips_store(self, mock_hat_repo):
        assert HardHatService(MagicMock()).update_hat(1, HardHatUpdate()) is True
        mock_hat_repo.return_value.update_hat.assert_not_called()
