from datetime import datetime, timezone

import pytest
from sqlalchemy import String, Text

from invoice_api.core.errors import ImmutableFieldError
from invoice_api.v1_0.models import Customer, CUSTOMER_RULES

from conftest import acme_kwargs


def test_table_mapping():
    table = Customer.__table__
    assert table.name == "customers"
    assert [c.name for c in table.columns] == [
        "id", "name", "email", "address", "tax_id", "phone", "created_at",
    ]
    assert table.c.id.primary_key

    assert not table.c.name.nullable and not table.c.name.unique
    assert not table.c.email.nullable and table.c.email.unique
    assert table.c.tax_id.nullable and table.c.tax_id.unique
    assert table.c.address.nullable and table.c.phone.nullable
    assert not table.c.created_at.nullable

    assert isinstance(table.c.address.type, Text)
    assert isinstance(table.c.email.type, String) and table.c.email.type.length == 100
    assert table.c.tax_id.type.length == 50
    assert table.c.phone.type.length == 50


def test_every_bounded_column_has_a_length_check():
    names = {c.name for c in Customer.__table__.constraints}
    for col in ("name", "email", "address", "tax_id", "phone"):
        assert f"ck_customers_{col}_length" in names


def test_rules_describe_the_columns():
    assert CUSTOMER_RULES["name"].max_length == 100
    assert CUSTOMER_RULES["email"].unique
    assert CUSTOMER_RULES["address"].max_length == 300
    assert CUSTOMER_RULES["address"].unbounded_text
    for col, rule in CUSTOMER_RULES.items():
        assert Customer.__table__.c[col].info["rule"] is rule


def test_construction_keeps_caller_fields():
    c = Customer(**acme_kwargs())
    assert c.name == "Acme Corp"
    assert c.email == "billing@acme.com"
    assert c.address == "1 Main St"
    assert c.tax_id == "TAX-001"
    assert c.phone == "555-0100"
    assert c.id is None
    assert c.created_at is None


def test_optional_fields_default_to_none():
    c = Customer(name="Acme Corp", email="billing@acme.com")
    assert c.address is None and c.tax_id is None and c.phone is None


@pytest.mark.parametrize("field", ["id", "created_at"])
def test_constructor_rejects_identity_fields(field):
    with pytest.raises(TypeError):
        Customer(**acme_kwargs(), **{field: 1})


def test_identity_fields_cannot_be_assigned():
    c = Customer(**acme_kwargs())
    with pytest.raises(ImmutableFieldError) as exc:
        c.id = 7
    assert exc.value.field == "id"
    with pytest.raises(ImmutableFieldError):
        c.created_at = datetime.now(timezone.utc)
    assert c.id is None and c.created_at is None


def test_caller_fields_are_plain_attributes():
    c = Customer(**acme_kwargs())
    c.phone = "555-0199"
    c.tax_id = None
    assert c.phone == "555-0199"
    assert c.tax_id is None
