import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio

from invoice_api.storage.database import create_schema, make_engine, make_session_factory
from invoice_api.v1_0.repositories import CustomerRepository


@pytest_asyncio.fixture
async def engine():
    eng = make_engine("sqlite+aiosqlite:///:memory:")
    await create_schema(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
def repo():
    return CustomerRepository()


def acme_kwargs(**overrides):
    data = dict(
        name="Acme Corp",
        email="billing@acme.com",
        address="1 Main St",
        tax_id="TAX-001",
        phone="555-0100",
    )
    data.update(overrides)
    return data
