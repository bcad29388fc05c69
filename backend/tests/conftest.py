import pytest

from app.models.database import build_engine, build_session_factory, init_db
from app.services.core.repositories import MessageRepository, TranslationStatsRepository
from tests.helpers import RecordingNotifier


@pytest.fixture
async def engine(tmp_path):
    """SQLite file database per test.

    A file (rather than :memory:) so that every pooled connection sees the
    same tables, which the concurrency tests rely on.
    """
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def message_repository(session_factory):
    return MessageRepository(session_factory)


@pytest.fixture
def stats_repository(session_factory):
    return TranslationStatsRepository(session_factory)


@pytest.fixture
def notifier():
    return RecordingNotifier()
