"""Unit tests for the resource clients."""

import pytest

from clients import (
    CLIENTS,
    EventDefinitionClient,
    EventNotificationClient,
    IndexSetClient,
    InputClient,
)
from errors import ResourceNotFoundError, TransportError, ValidationError
from kinds import ResourceKind


class TestClientRegistry:
    def test_one_client_per_kind(self):
        assert set(CLIENTS) == set(ResourceKind)
        for kind, client_class in CLIENTS.items():
            assert client_class.kind is kind


@pytest.mark.asyncio
class TestValidationBeforeIO:
    """Required-value checks never reach the transport."""

    @pytest.mark.parametrize("client_class", list(CLIENTS.values()))
    async def test_get_requires_id(self, client_class, fake_transport):
        with pytest.raises(ValidationError, match="ID is required"):
            await client_class(fake_transport).get("")
        assert fake_transport.calls == []

    @pytest.mark.parametrize("client_class", list(CLIENTS.values()))
    async def test_delete_requires_id(self, client_class, fake_transport):
        with pytest.raises(ValidationError, match="ID is required"):
            await client_class(fake_transport).delete("")
        assert fake_transport.calls == []

    async def test_create_requires_payload(self, fake_transport):
        with pytest.raises(ValidationError, match="create input request is required"):
            await InputClient(fake_transport).create(None)
        assert fake_transport.calls == []

    async def test_create_input_requires_type(self, fake_transport):
        with pytest.raises(ValidationError, match="input type is required"):
            await InputClient(fake_transport).create({"title": "syslog-in"})
        assert fake_transport.calls == []

    async def test_create_event_definition_requires_config_type(self, fake_transport):
        with pytest.raises(
            ValidationError, match="event definition config.type is required"
        ):
            await EventDefinitionClient(fake_transport).create(
                {"title": "Errors", "config": {}}
            )
        assert fake_transport.calls == []

    async def test_create_index_set_requires_prefix(self, fake_transport):
        with pytest.raises(ValidationError, match="index set index_prefix is required"):
            await IndexSetClient(fake_transport).create({"title": "Logs"})
        assert fake_transport.calls == []

    async def test_update_requires_id(self, fake_transport):
        with pytest.raises(ValidationError, match="ID is required"):
            await InputClient(fake_transport).update("", {"title": "t", "type": "x"})
        assert fake_transport.calls == []

    async def test_update_requires_payload(self, fake_transport):
        with pytest.raises(ValidationError, match="update input request is required"):
            await InputClient(fake_transport).update("x", None)
        assert fake_transport.calls == []

    async def test_create_requires_title(self, fake_transport):
        with pytest.raises(ValidationError, match="event notification title is required"):
            await EventNotificationClient(fake_transport).create(
                {"title": "", "config": {"type": "email-notification-v1"}}
            )
        assert fake_transport.calls == []

    async def test_update_requires_title(self, fake_transport):
        with pytest.raises(ValidationError, match="index set title is required"):
            await IndexSetClient(fake_transport).update("is1", {"title": ""})
        assert fake_transport.calls == []


@pytest.mark.asyncio
class TestRequests:
    """Paths, methods and envelopes of each operation."""

    async def test_get(self, fake_transport):
        fake_transport.respond("GET", "system/inputs/abc", {"id": "abc", "title": "t"})
        record = await InputClient(fake_transport).get("abc")
        assert record == {"id": "abc", "title": "t"}

    async def test_get_non_object_response(self, fake_transport):
        fake_transport.respond("GET", "system/inputs/abc", ["not", "an", "object"])
        with pytest.raises(TransportError, match="expected a input object"):
            await InputClient(fake_transport).get("abc")

    async def test_get_not_found_propagates(self, fake_transport):
        fake_transport.respond(
            "GET", "system/inputs/gone", ResourceNotFoundError("{}", "GET", "system/inputs/gone")
        )
        with pytest.raises(ResourceNotFoundError):
            await InputClient(fake_transport).get("gone")

    async def test_list(self, fake_transport):
        envelope = {"total": 1, "index_sets": [{"id": "is1", "title": "Logs"}]}
        fake_transport.respond("GET", "system/indices/index_sets", envelope)
        assert await IndexSetClient(fake_transport).list() == envelope

    async def test_create_event_definition_uses_envelope(self, fake_transport):
        fake_transport.respond("POST", "events/definitions", {"id": "d1", "title": "Errors"})
        payload = {"title": "Errors", "config": {"type": "aggregation-v1"}}
        share = {"selected_grantee_capabilities": {"grn::::user:jane": "view"}}

        record = await EventDefinitionClient(fake_transport).create(payload, share)

        assert record == {"id": "d1", "title": "Errors"}
        (call,) = fake_transport.calls
        assert call["body"] == {"entity": payload, "share_request": share}

    async def test_create_notification_without_share(self, fake_transport):
        fake_transport.respond("POST", "events/notifications", {"id": "n1"})
        payload = {"title": "Mail", "config": {"type": "email-notification-v1"}}
        await EventNotificationClient(fake_transport).create(payload)
        assert fake_transport.calls[0]["body"] == {"entity": payload}

    async def test_create_input_sent_flat(self, fake_transport):
        fake_transport.respond("POST", "system/inputs", {"id": "abc123"})
        payload = {"title": "syslog-in", "type": "x", "global": True}
        record = await InputClient(fake_transport).create(payload)
        assert record == {"id": "abc123"}
        assert fake_transport.calls[0]["body"] == payload

    async def test_create_empty_response(self, fake_transport):
        fake_transport.respond("POST", "system/inputs", None)
        record = await InputClient(fake_transport).create({"title": "t", "type": "x"})
        assert record == {}

    async def test_update(self, fake_transport):
        fake_transport.respond("PUT", "events/notifications/n1", {"id": "n1"})
        payload = {"id": "n1", "title": "Mail", "config": {"type": "email-notification-v1"}}
        await EventNotificationClient(fake_transport).update("n1", payload)
        assert fake_transport.calls[0]["method"] == "PUT"
        assert fake_transport.calls[0]["body"] == {"entity": payload}

    async def test_delete_does_not_decode(self, fake_transport):
        fake_transport.respond("DELETE", "system/indices/index_sets/is1", None)
        result = await IndexSetClient(fake_transport).delete("is1")
        assert result is None
        assert fake_transport.calls[0]["decode"] is False


@pytest.mark.asyncio
class TestSearch:
    async def test_exact_title_match(self, fake_transport):
        fake_transport.respond(
            "GET",
            "events/notifications",
            {
                "total": 4,
                "notifications": [
                    {"id": "1", "title": "a"},
                    {"id": "2", "title": "b"},
                    {"id": "3", "title": "b"},
                    {"id": "4", "title": "B"},
                ],
            },
        )
        client = EventNotificationClient(fake_transport)

        assert [r["id"] for r in await client.search("a")] == ["1"]
        assert [r["id"] for r in await client.search("b")] == ["2", "3"]
        assert await client.search("c") == []

    async def test_missing_list_key(self, fake_transport):
        fake_transport.respond("GET", "system/inputs", {"total": 0})
        assert await InputClient(fake_transport).search("x") == []
