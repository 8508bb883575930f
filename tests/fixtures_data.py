"""Conjunto de dados reutilizável para os cenários do storefront."""

from datetime import date, datetime
from decimal import Decimal

TEST_AUTH_SECRET = "test-auth-secret"
TEST_ENV_SECRET = "test-env-secret"

LAST_UPDATE = datetime(2024, 5, 1, 12, 0, 0)

COUNTRIES = [
    {"country_id": 1, "country": "Brazil", "last_update": LAST_UPDATE},
    {"country_id": 2, "country": "Portugal", "last_update": LAST_UPDATE},
]

CITIES = [
    {"city_id": 10, "city": "Recife", "country_id": 1, "last_update": LAST_UPDATE},
    {"city_id": 11, "city": "Olinda", "country_id": 1, "last_update": LAST_UPDATE},
    {"city_id": 20, "city": "Lisboa", "country_id": 2, "last_update": LAST_UPDATE},
]

ADDRESSES = [
    {
        "address_id": 100,
        "address": "Rua da Aurora, 10",
        "address2": None,
        "district": "Boa Vista",
        "city_id": 10,
        "postal_code": "50050-000",
        "phone": "8133330000",
        "last_update": LAST_UPDATE,
    },
    {
        "address_id": 200,
        "address": "Rua Augusta, 5",
        "address2": "2o andar",
        "district": "Baixa",
        "city_id": 20,
        "postal_code": "1100-048",
        "phone": "351210000000",
        "last_update": LAST_UPDATE,
    },
]

CUSTOMERS = [
    {
        "customer_id": 1000,
        "store_id": 1,
        "address_id": 100,
        "first_name": "Maria",
        "last_name": "Silva",
        "ssn": None,
        "email": "maria@example.com",
        "active": True,
        "create_date": date(2024, 1, 15),
        "last_update": LAST_UPDATE,
    },
    {
        "customer_id": 1001,
        "store_id": 2,
        "address_id": 200,
        "first_name": "João",
        "last_name": "Costa",
        "ssn": "123-45-6789",
        "email": "joao@example.com",
        "active": False,
        "create_date": date(2024, 2, 20),
        "last_update": LAST_UPDATE,
    },
]

STAFF = [
    {
        "staff_id": 1,
        "store_id": 1,
        "address_id": 100,
        "first_name": "Ana",
        "last_name": "Souza",
        "email": "ana@storefront.test",
        "username": "ana",
        "password": "hashed",
        "active": True,
        "last_update": LAST_UPDATE,
    },
]

PAYMENTS = [
    {
        "payment_id": 5000,
        "amount": Decimal("9.99"),
        "customer_id": 1000,
        "staff_id": 1,
        "rental_id": None,
        "cc_number": "4111111111111111",
        "cc_expiration": "12/29",
        "cc_cvv": "123",
        "payment_date": datetime(2024, 3, 1, 10, 30, 0),
    },
    {
        "payment_id": 5001,
        "amount": Decimal("4.50"),
        "customer_id": 1000,
        "staff_id": 1,
        "rental_id": 77,
        "cc_number": None,
        "cc_expiration": None,
        "cc_cvv": None,
        "payment_date": datetime(2024, 3, 2, 11, 0, 0),
    },
    {
        "payment_id": 5002,
        "amount": Decimal("2.00"),
        "customer_id": 1001,
        "staff_id": 1,
        "rental_id": None,
        "cc_number": None,
        "cc_expiration": None,
        "cc_cvv": None,
        "payment_date": datetime(2024, 3, 3, 9, 0, 0),
    },
]

# Ordem respeita as chaves estrangeiras
STOREFRONT_ROWS = [
    ("country", COUNTRIES),
    ("city", CITIES),
    ("address", ADDRESSES),
    ("customer", CUSTOMERS),
    ("staff", STAFF),
    ("payment", PAYMENTS),
]
