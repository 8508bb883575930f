from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from app.models import Address, City, Country, Customer, Payment, Staff

EXPECTED_ENTITIES = {"country", "city", "address", "customer", "staff", "payment"}


def test_registry_exposes_exactly_the_six_storefront_entities(registry):
    assert set(registry) == EXPECTED_ENTITIES
    assert len(registry) == 6
    assert registry["country"].model is Country
    assert registry["city"].model is City
    assert registry["address"].model is Address
    assert registry["customer"].model is Customer
    assert registry["staff"].model is Staff
    assert registry["payment"].model is Payment


def test_registry_uses_singular_table_names():
    assert Country.__tablename__ == "country"
    assert Staff.__tablename__ == "staff"
    assert Payment.__tablename__ == "payment"
    assert {column.name for column in Payment.__table__.columns} == {
        "payment_id",
        "amount",
        "customer_id",
        "staff_id",
        "rental_id",
        "cc_number",
        "cc_expiration",
        "cc_cvv",
        "payment_date",
    }


def test_payment_customer_matches_payment_customer_id(seeded_registry):
    payment = seeded_registry["payment"].get(5002)
    customer = seeded_registry["payment"].related(5002, "customer")

    assert customer.customer_id == payment.customer_id == 1001
    assert customer.first_name == "João"


def test_relationship_traversal_customer_to_country(seeded_registry):
    address = seeded_registry["customer"].related(1000, "address")
    city = seeded_registry["address"].related(address.address_id, "city")
    country = seeded_registry["city"].related(city.city_id, "country")

    assert address.address_id == 100
    assert city.city == "Recife"
    assert country.country == "Brazil"


def test_reverse_associations_return_lists(seeded_registry):
    cities = seeded_registry["country"].related(1, "cities")
    payments = seeded_registry["staff"].related(1, "payments")

    assert sorted(city.city_id for city in cities) == [10, 11]
    assert sorted(payment.payment_id for payment in payments) == [5000, 5001, 5002]


def test_list_filters_sorts_and_paginates(seeded_registry):
    payments = seeded_registry["payment"]

    by_customer = payments.list({"customer_id": 1000})
    newest_first = payments.list(order_by=["-payment_date"], limit=2)
    second_page = payments.list(offset=2, limit=2)

    assert [p.payment_id for p in by_customer] == [5000, 5001]
    assert [p.payment_id for p in newest_first] == [5002, 5001]
    assert [p.payment_id for p in second_page] == [5002]
    assert payments.count() == 3
    assert payments.count({"customer_id": 1001}) == 1


def test_null_filter_matches_missing_values(seeded_registry):
    without_rental = seeded_registry["payment"].list({"rental_id": None})
    assert [p.payment_id for p in without_rental] == [5000, 5002]


def test_create_update_delete_roundtrip(seeded_registry):
    countries = seeded_registry["country"]

    created = countries.create({"country_id": 3, "country": "Chile"})
    assert created.last_update is not None

    updated = countries.update(3, {"country": "Chile (CL)"})
    assert updated.country == "Chile (CL)"
    assert countries.get(3).country == "Chile (CL)"

    assert countries.delete(3) is True
    assert countries.get(3) is None
    assert countries.delete(3) is False


def test_update_missing_row_returns_none(seeded_registry):
    assert seeded_registry["city"].update(999, {"city": "Nowhere"}) is None


def test_primary_key_cannot_be_updated(seeded_registry):
    with pytest.raises(ValueError):
        seeded_registry["country"].update(1, {"country_id": 9})


def test_unknown_fields_are_rejected(seeded_registry):
    with pytest.raises(ValueError):
        seeded_registry["customer"].list({"nickname": "x"})
    with pytest.raises(ValueError):
        seeded_registry["customer"].list(order_by=["-nickname"])
    with pytest.raises(ValueError):
        seeded_registry["country"].create({"country_id": 4, "country": "Peru", "flag": "pe"})


def test_city_requires_existing_country(seeded_registry):
    with pytest.raises(IntegrityError):
        seeded_registry["city"].create({"city_id": 99, "city": "Atlantis", "country_id": 404})


def test_payment_requires_existing_customer_and_staff(seeded_registry):
    with pytest.raises(IntegrityError):
        seeded_registry["payment"].create(
            {
                "payment_id": 6000,
                "amount": Decimal("1.00"),
                "customer_id": 404,
                "staff_id": 1,
                "payment_date": datetime(2024, 4, 1),
            }
        )
    with pytest.raises(IntegrityError):
        seeded_registry["payment"].create(
            {
                "payment_id": 6001,
                "amount": Decimal("1.00"),
                "customer_id": 1000,
                "staff_id": 404,
                "payment_date": datetime(2024, 4, 1),
            }
        )


def test_related_on_missing_row_raises_lookup_error(seeded_registry):
    with pytest.raises(LookupError):
        seeded_registry["payment"].related(404, "customer")


def test_related_on_unknown_relation_raises_value_error(seeded_registry):
    with pytest.raises(ValueError):
        seeded_registry["payment"].related(5000, "rental")


def test_customer_active_defaults_to_true(seeded_registry):
    customer = seeded_registry["customer"].create(
        {
            "customer_id": 1002,
            "store_id": 1,
            "address_id": 100,
            "first_name": "Lia",
            "last_name": "Moura",
        }
    )
    assert customer.active is True
    assert customer.create_date is not None
