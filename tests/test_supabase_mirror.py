# tests/test_supabase_mirror.py
from __future__ import annotations

from unittest.mock import MagicMock, patch

from supabase_client import helpers


def _client(rows):
    sb = MagicMock()
    sb.table.return_value.insert.return_value.execute.return_value = MagicMock(data=rows)
    return sb


def test_mirror_is_noop_when_unconfigured():
    with patch.object(helpers, "supabase_configured", return_value=False), \
            patch.object(helpers, "get_supabase_client") as get_client:
        assert helpers.mirror_contact_message({"name": "Ada"}) == {}
    get_client.assert_not_called()


def test_insert_record_adds_timestamp():
    sb = _client([{"id": 1, "name": "Ada"}])
    with patch.object(helpers, "get_supabase_client", return_value=sb):
        row = helpers.insert_record("contact_messages", {"name": "Ada"})
    assert row == {"id": 1, "name": "Ada"}
    payload = sb.table.return_value.insert.call_args.args[0]
    assert "created_at" in payload
    sb.table.assert_called_with("contact_messages")


def test_insert_record_swallows_errors():
    with patch.object(helpers, "get_supabase_client", side_effect=RuntimeError("no creds")):
        assert helpers.insert_record("contact_messages", {"name": "Ada"}) == {}


def test_insert_record_empty_response():
    with patch.object(helpers, "get_supabase_client", return_value=_client([])):
        assert helpers.insert_record("contact_messages", {"name": "Ada"}) == {}

