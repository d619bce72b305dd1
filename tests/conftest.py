"""
Pytest configuration for relationship notifier tests

Provides an in-memory host (store, directory, session, mutation API) and a
watcher wired to it.
"""

import pytest

from relationship_notifier import (
    CollectingNotifier,
    InMemoryDirectory,
    InMemoryRelationshipActions,
    InMemoryRelationshipStore,
    NotifierConfig,
    RelationshipWatcher,
    StaticSession,
    UserRecord,
)

SELF_ID = "me"


@pytest.fixture
def users():
    return {
        "u1": UserRecord(id="u1", display_name="u1"),
        "u2": UserRecord(id="u2", display_name="Alice"),
        "bot": UserRecord(id="bot", display_name="Helper Bot", is_automated=True),
        SELF_ID: UserRecord(id=SELF_ID, display_name="Me"),
    }


@pytest.fixture
def directory(users):
    return InMemoryDirectory(*users.values())


@pytest.fixture
def session():
    return StaticSession(SELF_ID)


@pytest.fixture
def store():
    return InMemoryRelationshipStore()


@pytest.fixture
def config():
    return NotifierConfig()


@pytest.fixture
def notifier():
    return CollectingNotifier()


@pytest.fixture
def host_actions(store):
    return InMemoryRelationshipActions(store)


@pytest.fixture
def watcher(store, directory, session, notifier, config, host_actions):
    w = RelationshipWatcher(
        store=store,
        directory=directory,
        session=session,
        notifier=notifier,
        config=config,
        actions=host_actions,
    )
    yield w
    w.deactivate()
