"""Tests for interaction signature verification and authorization."""

from dataclasses import replace

import pytest
from game_night_fakes import make_interaction
from nacl.signing import SigningKey

from core.game_nights.interaction import Interaction
from core.game_nights.webhook_handler import (
    NOT_AUTHORIZED_MESSAGE,
    WRONG_GUILD_MESSAGE,
    InteractionSignatureError,
    authorize_command,
    deferred_response,
    ephemeral_message,
    pong_response,
    verify_interaction_signature,
)


class TestVerifyInteractionSignature:
    def setup_method(self):
        self.signing_key = SigningKey.generate()
        self.public_key = self.signing_key.verify_key.encode().hex()
        self.payload = b'{"type": 1}'
        self.timestamp = "1700000000"

    def _sign(self, payload: bytes, timestamp: str) -> str:
        return self.signing_key.sign(timestamp.encode() + payload).signature.hex()

    def test_valid_signature_passes(self):
        signature = self._sign(self.payload, self.timestamp)

        # Should not raise
        verify_interaction_signature(
            self.payload, signature, self.timestamp, self.public_key
        )

    def test_tampered_body_rejected(self):
        signature = self._sign(self.payload, self.timestamp)

        with pytest.raises(InteractionSignatureError) as exc_info:
            verify_interaction_signature(
                b'{"type": 2}', signature, self.timestamp, self.public_key
            )

        assert "Signature verification failed" in str(exc_info.value)

    def test_timestamp_is_part_of_signed_message(self):
        signature = self._sign(self.payload, self.timestamp)

        with pytest.raises(InteractionSignatureError):
            verify_interaction_signature(
                self.payload, signature, "1700000001", self.public_key
            )

    def test_other_key_rejected(self):
        other = SigningKey.generate()
        signature = other.sign(self.timestamp.encode() + self.payload).signature.hex()

        with pytest.raises(InteractionSignatureError):
            verify_interaction_signature(
                self.payload, signature, self.timestamp, self.public_key
            )

    def test_missing_headers_rejected(self):
        with pytest.raises(InteractionSignatureError) as exc_info:
            verify_interaction_signature(self.payload, None, self.timestamp, self.public_key)

        assert "Missing signature headers" in str(exc_info.value)

        with pytest.raises(InteractionSignatureError):
            verify_interaction_signature(
                self.payload, self._sign(self.payload, self.timestamp), None, self.public_key
            )

    def test_malformed_signature_rejected(self):
        with pytest.raises(InteractionSignatureError):
            verify_interaction_signature(
                self.payload, "not-hex", self.timestamp, self.public_key
            )


class TestAuthorizeCommand:
    def test_staff_role_allowed(self, config):
        interaction = Interaction.from_payload(make_interaction("lock", roles=["401"]))
        assert authorize_command(interaction, config) is None

    def test_administrator_allowed(self, config):
        interaction = Interaction.from_payload(
            make_interaction("lock", roles=[], permissions=str(1 << 3))
        )
        assert authorize_command(interaction, config) is None

    def test_other_permissions_not_enough(self, config):
        # MANAGE_CHANNELS | MOVE_MEMBERS without ADMINISTRATOR
        interaction = Interaction.from_payload(
            make_interaction("lock", roles=["500"], permissions=str((1 << 4) | (1 << 24)))
        )
        assert authorize_command(interaction, config) == NOT_AUTHORIZED_MESSAGE

    def test_wrong_guild_rejected_even_for_staff(self, config):
        interaction = Interaction.from_payload(
            make_interaction("lock", roles=["400"], guild_id="999")
        )
        assert authorize_command(interaction, config) == WRONG_GUILD_MESSAGE

    def test_direct_message_rejected(self, config):
        payload = make_interaction("lock")
        del payload["guild_id"]
        assert authorize_command(Interaction.from_payload(payload), config) == WRONG_GUILD_MESSAGE

    def test_no_staff_roles_configured(self, config):
        config = replace(config, staff_role_ids=())
        interaction = Interaction.from_payload(make_interaction("lock", roles=["400"]))
        assert authorize_command(interaction, config) == NOT_AUTHORIZED_MESSAGE


class TestInitialResponses:
    def test_pong(self):
        assert pong_response() == {"type": 1}

    def test_deferred_is_ephemeral(self):
        assert deferred_response() == {"type": 5, "data": {"flags": 64}}

    def test_ephemeral_message(self):
        assert ephemeral_message("nope") == {
            "type": 4,
            "data": {"content": "nope", "flags": 64},
        }
