"""Tests for the provider capability, chain combinator and memoizing decorator."""

import pytest

from rundeck_client_core.auth.base import (
    ChainProvider,
    CredentialProvider,
    MemoizingProvider,
    StaticProvider,
    is_blank,
    normalize,
)
from rundeck_client_core.testing import CountingProvider


class TestBlankHandling:
    """Test blank detection and normalization."""

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_blank_values(self, value):
        assert is_blank(value)
        assert normalize(value) is None

    @pytest.mark.unit
    def test_non_blank_value_kept_as_is(self):
        assert not is_blank(" alice ")
        assert normalize(" alice ") == " alice "


class TestCredentialProvider:
    """Test the default capability and token-mode derivation."""

    @pytest.mark.unit
    def test_defaults_are_absent(self):
        provider = CredentialProvider()

        assert provider.lookup_username() is None
        assert provider.lookup_password() is None
        assert provider.lookup_token() is None
        assert provider.is_token_auth() is False

    @pytest.mark.unit
    def test_token_without_username_is_token_auth(self):
        assert StaticProvider(token="abc123").is_token_auth() is True

    @pytest.mark.unit
    def test_username_disables_token_auth(self):
        provider = StaticProvider(username="alice", token="abc123")

        assert provider.is_token_auth() is False

    @pytest.mark.unit
    def test_no_username_no_token_is_not_token_auth(self):
        assert StaticProvider(password="secret").is_token_auth() is False

    @pytest.mark.unit
    def test_explicit_blank_username_allows_token_auth(self):
        """An empty-string username counts as blank for token-mode derivation."""
        provider = CountingProvider(username="", token="abc123")

        assert provider.is_token_auth() is True

    @pytest.mark.unit
    def test_blank_token_is_not_token_auth(self):
        assert CountingProvider(username="", token="  ").is_token_auth() is False

    @pytest.mark.unit
    def test_username_checked_before_token(self):
        """With a username present, the token is never looked up."""
        provider = CountingProvider(username="alice", token="abc123")

        provider.is_token_auth()

        assert provider.calls["username"] == 1
        assert provider.calls["token"] == 0


class TestStaticProvider:
    """Test the explicit-value provider."""

    @pytest.mark.unit
    def test_returns_given_values(self):
        provider = StaticProvider(username="alice", password="secret")

        assert provider.lookup_username() == "alice"
        assert provider.lookup_password() == "secret"
        assert provider.lookup_token() is None

    @pytest.mark.unit
    def test_blank_values_are_absent(self):
        provider = StaticProvider(username="  ", password="", token=None)

        assert provider.lookup_username() is None
        assert provider.lookup_password() is None

    @pytest.mark.unit
    def test_repr_does_not_show_secrets(self):
        provider = StaticProvider(username="alice", password="secret", token="abc123")

        assert "secret" not in repr(provider)
        assert "abc123" not in repr(provider)


class TestChainProvider:
    """Test first-present-wins composition."""

    @pytest.mark.unit
    def test_first_present_value_wins(self):
        chain = ChainProvider([StaticProvider(username="alice"), StaticProvider(username="bob")])

        assert chain.lookup_username() == "alice"

    @pytest.mark.unit
    def test_order_matters(self):
        first = StaticProvider(username="alice")
        second = StaticProvider(username="bob")

        assert ChainProvider([first, second]).lookup_username() == "alice"
        assert ChainProvider([second, first]).lookup_username() == "bob"

    @pytest.mark.unit
    def test_falls_through_absent_providers(self):
        chain = ChainProvider([StaticProvider(), StaticProvider(), StaticProvider(token="abc123")])

        assert chain.lookup_token() == "abc123"

    @pytest.mark.unit
    def test_all_absent_returns_none(self):
        chain = ChainProvider([StaticProvider(), StaticProvider()])

        assert chain.lookup_username() is None
        assert chain.lookup_password() is None
        assert chain.lookup_token() is None

    @pytest.mark.unit
    def test_empty_chain_returns_none(self):
        assert ChainProvider([]).lookup_token() is None

    @pytest.mark.unit
    def test_later_providers_not_consulted_once_answered(self):
        first = CountingProvider(password="secret")
        second = CountingProvider(password="other")

        assert ChainProvider([first, second]).lookup_password() == "secret"
        assert second.calls["password"] == 0

    @pytest.mark.unit
    def test_empty_string_is_an_answer(self):
        """An explicit empty string stops the chain, unlike None."""
        first = CountingProvider(username="")
        second = CountingProvider(username="bob")

        assert ChainProvider([first, second]).lookup_username() == ""
        assert second.calls["username"] == 0

    @pytest.mark.unit
    def test_fields_resolve_independently(self):
        chain = ChainProvider([StaticProvider(username="alice"), StaticProvider(password="secret")])

        assert chain.lookup_username() == "alice"
        assert chain.lookup_password() == "secret"

    @pytest.mark.unit
    def test_chain_method_appends_lower_precedence(self):
        chain = StaticProvider(username="alice").chain(StaticProvider(username="bob", token="abc123"))

        assert isinstance(chain, ChainProvider)
        assert chain.lookup_username() == "alice"
        assert chain.lookup_token() == "abc123"

    @pytest.mark.unit
    def test_nested_chains(self):
        chain = (
            StaticProvider(password="p1")
            .chain(StaticProvider(username="u2"))
            .chain(StaticProvider(username="u3", token="t3"))
        )

        assert chain.lookup_username() == "u2"
        assert chain.lookup_password() == "p1"
        assert chain.lookup_token() == "t3"

    @pytest.mark.unit
    def test_token_auth_derived_from_chain_fields(self):
        """A higher-precedence username disables token auth from a later token."""
        chain = StaticProvider(username="bob").chain(StaticProvider(token="xyz"))

        assert chain.is_token_auth() is False

    @pytest.mark.unit
    def test_each_link_derives_token_auth_independently(self):
        password_link = StaticProvider(username="bob", password="hunter2")
        token_link = StaticProvider(token="xyz")

        assert password_link.is_token_auth() is False
        assert token_link.is_token_auth() is True
        # the later link still supplies a username to the chain as a whole
        assert token_link.chain(password_link).is_token_auth() is False


class TestMemoizingProvider:
    """Test at-most-once evaluation per field."""

    @pytest.mark.unit
    def test_token_looked_up_once(self):
        inner = CountingProvider(token=["first", "second"])
        memo = MemoizingProvider(inner)

        assert memo.lookup_token() == "first"
        assert memo.lookup_token() == "first"
        assert inner.calls["token"] == 1

    @pytest.mark.unit
    def test_absent_result_is_cached(self):
        inner = CountingProvider(token=[None, "late-token"])
        memo = inner.memoize()

        assert memo.lookup_token() is None
        assert memo.lookup_token() is None
        assert inner.calls["token"] == 1

    @pytest.mark.unit
    def test_fields_memoized_independently(self):
        inner = CountingProvider(username="alice", password="secret")
        memo = inner.memoize()

        memo.lookup_username()
        memo.lookup_username()
        assert inner.calls["password"] == 0

        memo.lookup_password()
        memo.lookup_password()
        assert inner.calls == {"username": 1, "password": 1}

    @pytest.mark.unit
    def test_token_auth_does_not_repeat_username_lookup(self):
        inner = CountingProvider(username="", token="abc123")
        memo = inner.memoize()

        memo.lookup_username()
        assert memo.is_token_auth() is True
        assert memo.lookup_token() == "abc123"

        assert inner.calls["username"] == 1
        assert inner.calls["token"] == 1

    @pytest.mark.unit
    def test_memoize_is_idempotent(self):
        memo = CountingProvider().memoize()

        assert memo.memoize() is memo

    @pytest.mark.unit
    def test_memoized_provider_composes_in_chain(self):
        inner = CountingProvider(username=["alice", "bob"])
        chain = StaticProvider().chain(inner.memoize())

        assert chain.lookup_username() == "alice"
        assert chain.lookup_username() == "alice"
        assert inner.calls["username"] == 1
