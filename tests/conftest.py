"""Pytest fixtures for dashsearch tests."""

from collections.abc import AsyncGenerator, Generator
from unittest.mock import patch

import pytest
import pytest_asyncio
import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from dashsearch.config.settings import Settings
from dashsearch.dashboard import AttributeDescriptor, DashboardConfig
from dashsearch.db.config import create_engine_from_settings, create_session_factory
from dashsearch.search.strategy import SearchMode

from sample_models import Base, Customer, Owner, Person, active_only, vip_only


# =============================================================================
# Structlog Configuration Fixture
# =============================================================================


@pytest.fixture(scope="function", autouse=True)
def reset_structlog_after_test():
    """Reset structlog configuration after each test.

    This ensures tests that modify structlog global state
    don't affect other tests.
    """
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def mock_settings() -> Settings:
    """Create mock settings for testing."""
    return Settings(
        ENVIRONMENT="test",
        DEBUG=False,
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        log_level="DEBUG",
        search_cast_length=256,
    )


@pytest.fixture
def patch_settings(mock_settings: Settings) -> Generator[Settings, None, None]:
    """Patch get_settings to return mock settings."""
    with (
        patch("dashsearch.core.logging.get_settings", return_value=mock_settings),
        patch("dashsearch.search.strategy.get_settings", return_value=mock_settings),
    ):
        yield mock_settings


# =============================================================================
# Dashboards
# =============================================================================


@pytest.fixture
def name_dashboard() -> DashboardConfig:
    """Dashboard searching only the customer name, with collection filters."""
    return DashboardConfig.build(
        Customer,
        [
            AttributeDescriptor.scalar("id", searchable=False),
            AttributeDescriptor.scalar("name"),
        ],
        collection_filters={"active": active_only, "vip": vip_only},
    )


@pytest.fixture
def strict_name_dashboard() -> DashboardConfig:
    """Strict dashboard searching only the customer name."""
    return DashboardConfig.build(
        Customer,
        [AttributeDescriptor.scalar("name")],
        search_mode=SearchMode.STRICT,
    )


@pytest.fixture
def customer_dashboard() -> DashboardConfig:
    """Dashboard searching customer columns and the owner's names."""
    return DashboardConfig.build(
        Customer,
        {
            "id": AttributeDescriptor.scalar("id", searchable=False),
            "name": AttributeDescriptor.scalar("name"),
            "email": AttributeDescriptor.scalar("email"),
            "owner": AttributeDescriptor.association(
                "owner", searchable_fields=["first_name", "last_name"]
            ),
            "active": AttributeDescriptor.scalar("active", searchable=False),
        },
        collection_filters={"active": active_only, "vip": vip_only},
    )


# =============================================================================
# Database fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_engine(mock_settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine on in-memory SQLite."""
    engine = create_engine_from_settings(mock_settings)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    factory: async_sessionmaker[AsyncSession] = create_session_factory(test_engine)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def seeded_session(db_session: AsyncSession) -> AsyncSession:
    """Session with a small set of owners, people and customers."""
    joan = Owner(id=1, first_name="Joan", last_name="Smith")
    mark = Owner(id=2, first_name="Mark", last_name="Johnson")
    kim = Owner(id=3, first_name="Kim", last_name="Lee")
    ada = Person(id=1, full_name="Ada Lovelace")

    db_session.add_all(
        [
            joan,
            mark,
            kim,
            ada,
            Customer(id=1, name="foo", active=True, vip=True, owner_id=3, email="a@x.io"),
            Customer(id=2, name="foo", active=False, vip=True, owner_id=3),
            Customer(id=3, name="Acme", active=True, vip=False, owner_id=1, referrer_id=1),
            Customer(id=4, name="Globex", active=True, vip=False, owner_id=2),
            Customer(id=5, name="Initech", active=False, vip=False, owner_id=3),
        ]
    )
    await db_session.commit()
    return db_session


@pytest.fixture
def all_customers():
    """Unfiltered statement selecting every customer."""
    return select(Customer)
