"""Tests for the auth provider interface."""

import asyncio

import pytest
from folio.auth import AuthProvider, StaticAuthProvider, key_for
from folio.content.store import ANONYMOUS_KEY


class TestStaticAuthProvider:
    def test_satisfies_protocol(self):
        assert isinstance(StaticAuthProvider("SP1"), AuthProvider)

    def test_address_means_signed_in(self):
        provider = StaticAuthProvider("SP1")
        assert provider.is_authenticated
        assert provider.user_address == "SP1"

    def test_no_address_is_signed_out(self):
        provider = StaticAuthProvider()
        assert not provider.is_authenticated
        assert provider.user_address is None

    def test_disconnect_then_connect(self):
        provider = StaticAuthProvider("SP1")
        asyncio.run(provider.disconnect_wallet())
        assert provider.user_address is None
        asyncio.run(provider.connect_wallet())
        assert provider.user_address == "SP1"

    def test_connect_without_address(self):
        with pytest.raises(RuntimeError):
            asyncio.run(StaticAuthProvider().connect_wallet())


class TestKeyFor:
    def test_signed_in(self):
        assert key_for(StaticAuthProvider("SP1")) == "profile:SP1"

    def test_signed_out(self):
        assert key_for(StaticAuthProvider()) == ANONYMOUS_KEY

    def test_disconnected_falls_back_to_anonymous(self):
        provider = StaticAuthProvider("SP1")
        asyncio.run(provider.disconnect_wallet())
        assert key_for(provider) == ANONYMOUS_KEY
