import logging

import pytest

from sauth.auth.credentials import CredentialEntry, CredentialStore, is_authorized
from sauth.errors import InvalidConfiguration


def test_parse_keeps_order_and_looks_up_every_pair():
    store = CredentialStore.parse("foo,bar\nusername,password\nus3r,p@ssw0rd1")
    assert store.entries == (
        CredentialEntry("foo", "bar"),
        CredentialEntry("username", "password"),
        CredentialEntry("us3r", "p@ssw0rd1"),
    )
    for e in store.entries:
        assert store.lookup(e.username, e.password)
    assert not store.lookup("foo", "password")
    assert not store.lookup("nobody", "bar")


def test_lookup_is_case_sensitive_and_exact():
    store = CredentialStore.parse("Alice,Secret")
    assert store.lookup("Alice", "Secret")
    assert not store.lookup("alice", "Secret")
    assert not store.lookup("Alice", "secret")
    assert not store.lookup("Alice", "Secret ")


def test_duplicate_usernames_are_allowed():
    store = CredentialStore.parse("bob,one\nbob,two")
    assert store.lookup("bob", "one")
    assert store.lookup("bob", "two")


def test_password_may_contain_spaces():
    store = CredentialStore.parse("aladdin,open sesame")
    assert is_authorized(store, "aladdin", "open sesame")
    assert not is_authorized(store, "aladdin", "wrong")


@pytest.mark.parametrize(
    "raw",
    ["", "user,", ",pass", ",", "user", "a,b,c", "\n\n", "user,\n,pass\nx,y,z"],
)
def test_no_valid_entry_raises(raw):
    with pytest.raises(InvalidConfiguration):
        CredentialStore.parse(raw)


def test_malformed_entries_are_skipped_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="sauth.auth.credentials"):
        store = CredentialStore.parse("good,pass\nbad,\nx,hunter2,extra\nok,fine")

    assert [e.username for e in store.entries] == ["good", "ok"]
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2
    assert "line 2" in warnings[0].getMessage()
    assert "hunter2" not in caplog.text


def test_describe_masks_passwords():
    store = CredentialStore.parse("user1,pass1\nuser2,pass2")
    desc = store.describe()
    assert desc == "username=user1, pass=********\nusername=user2, pass=********\n"
    assert "pass1" not in repr(store)

