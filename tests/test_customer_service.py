from datetime import datetime, timezone

import pytest

from invoice_api.core.errors import ConstraintViolationError, CustomerNotFoundError
from invoice_api.main import create_container
from invoice_api.v1_0.entities import CustomerDTO
from invoice_api.v1_0.schemas import CustomerCreate, CustomerUpdate

from conftest import acme_kwargs


@pytest.fixture
def service():
    container = create_container()
    return container.api_container.customer_service()


def test_container_hands_out_singletons():
    container = create_container()
    api = container.api_container
    assert api.customer_service() is api.customer_service()
    assert api.customer_service().customer_repository is api.customer_repository()


async def test_create_returns_dto(service, session):
    before = datetime.now(timezone.utc)
    dto = await service.create(CustomerCreate(**acme_kwargs()), session)

    assert isinstance(dto, CustomerDTO)
    assert dto.id == 1
    assert dto.created_at >= before
    assert dto.email == "billing@acme.com"
    assert not session.in_transaction()


async def test_create_duplicate_email_rolls_back(service, session):
    await service.create(CustomerCreate(**acme_kwargs()), session)

    with pytest.raises(ConstraintViolationError) as exc:
        await service.create(
            CustomerCreate(name="Acme East", email="billing@acme.com", tax_id="TAX-002"),
            session,
        )
    assert exc.value.kind == "unique"

    # the session is usable again afterwards
    other = await service.create(CustomerCreate(name="Beta", email="beta@acme.com"), session)
    assert [c.email for c in await service.list_all(session)] == ["beta@acme.com", "billing@acme.com"]
    assert other.id is not None


async def test_get_and_get_by_email(service, session):
    created = await service.create(CustomerCreate(**acme_kwargs()), session)

    assert await service.get(created.id, session) == created
    assert await service.get_by_email("billing@acme.com", session) == created


async def test_get_missing(service, session):
    with pytest.raises(CustomerNotFoundError) as exc:
        await service.get(404, session)
    assert exc.value.customer_id == 404

    with pytest.raises(CustomerNotFoundError):
        await service.get_by_email("nobody@acme.com", session)


async def test_update_partial_keeps_identity(service, session):
    created = await service.create(CustomerCreate(**acme_kwargs()), session)

    updated = await service.update_partial(created.id, CustomerUpdate(phone="555-0199"), session)
    assert updated.phone == "555-0199"
    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.name == created.name


async def test_update_partial_missing(service, session):
    with pytest.raises(CustomerNotFoundError):
        await service.update_partial(9, CustomerUpdate(phone="1"), session)
    assert not session.in_transaction()


async def test_update_partial_duplicate_tax_id(service, session):
    await service.create(CustomerCreate(**acme_kwargs()), session)
    beta = await service.create(CustomerCreate(name="Beta", email="beta@acme.com"), session)

    with pytest.raises(ConstraintViolationError):
        await service.update_partial(beta.id, CustomerUpdate(tax_id="TAX-001"), session)

    assert (await service.get(beta.id, session)).tax_id is None


async def test_delete(service, session):
    created = await service.create(CustomerCreate(**acme_kwargs()), session)

    assert await service.delete(created.id, session) is True
    with pytest.raises(CustomerNotFoundError):
        await service.get(created.id, session)
    with pytest.raises(CustomerNotFoundError):
        await service.delete(created.id, session)


async def test_list_paginated(service, session):
    for i in range(12):
        await service.create(CustomerCreate(name=f"Customer {i}", email=f"c{i}@acme.com"), session)

    first = await service.list_paginated(1, session)
    assert len(first.items) == 10
    assert first.items[0].name == "Customer 0"
    assert (first.total, first.total_pages, first.has_next, first.has_prev) == (12, 2, True, False)

    second = await service.list_paginated(2, session)
    assert [c.name for c in second.items] == ["Customer 10", "Customer 11"]
    assert (second.has_next, second.has_prev) == (False, True)


async def test_list_paginated_empty(service, session):
    page = await service.list_paginated(1, session)
    assert page.items == []
    assert (page.total, page.total_pages, page.has_next, page.has_prev) == (0, 1, False, False)


async def test_mixed_case_email_is_stored_verbatim(service, session):
    dto = await service.create(CustomerCreate(name="Acme Corp", email="Billing@ACME.com"), session)
    assert dto.email == "Billing@ACME.com"

    found = await service.get_by_email("Billing@ACME.com", session)
    assert found.id == dto.id


@pytest.mark.parametrize("page", [0, -3])
async def test_list_paginated_clamps_low_pages(service, session, page):
    await service.create(CustomerCreate(**acme_kwargs()), session)

    result = await service.list_paginated(page, session)
    assert result.page == 1
    assert result.has_prev is False
    assert result.has_next is False
    assert [c.email for c in result.items] == ["billing@acme.com"]


def test_lookup_methods_are_documented(service):
    assert service.get_by_email.__doc__.strip()
    assert service.list_all.__doc__.strip()
