"""
================================================================================
Storefront Test Data Builder
================================================================================

Randomized, immutable test data for storefront flows (customers, products,
addresses), generated with Faker.

Features:
- Frozen records: a built object never changes afterwards
- Partial overrides: pass only the fields a test cares about
- Reproducible data with a seed

Usage:
    factory = DataFactory(seed=42)
    user = factory.user(first_name="Ada")
    product = build_product_data({"quantity": 2})

================================================================================
"""

from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Type, TypeVar
import string

from faker import Faker


R = TypeVar("R")

DEFAULT_COUNTRY = "United States"

# Vocabulary for product names ("<adjective> <material> <product>")
PRODUCT_ADJECTIVES = [
    "Small", "Ergonomic", "Rustic", "Intelligent", "Gorgeous", "Incredible",
    "Fantastic", "Practical", "Sleek", "Awesome", "Generic", "Handcrafted",
    "Handmade", "Licensed", "Refined", "Unbranded", "Tasty",
]
PRODUCT_MATERIALS = [
    "Steel", "Wooden", "Concrete", "Plastic", "Cotton", "Granite", "Rubber",
    "Metal", "Soft", "Fresh", "Frozen",
]
PRODUCT_NAMES = [
    "Chair", "Car", "Computer", "Keyboard", "Mouse", "Bike", "Ball", "Gloves",
    "Pants", "Shirt", "Table", "Shoes", "Hat", "Towels", "Soap", "Tuna",
    "Chicken", "Fish", "Cheese", "Bacon", "Pizza", "Salad", "Sausages", "Chips",
]
DEPARTMENTS = [
    "Books", "Movies", "Music", "Games", "Electronics", "Computers", "Home",
    "Garden", "Tools", "Grocery", "Health", "Beauty", "Toys", "Kids", "Baby",
    "Clothing", "Shoes", "Jewelery", "Sports", "Outdoors", "Automotive", "Industrial",
]


# ================================================================================
# Data Models
# ================================================================================

@dataclass(frozen=True)
class UserData:
    """Customer account and address details used by registration/checkout."""
    first_name: str
    last_name: str
    email: str
    password: str
    company: str
    address: str
    address2: str
    city: str
    state: str
    zip_code: str
    country: str
    phone: str
    mobile_phone: str
    alias: str


@dataclass(frozen=True)
class ProductData:
    """Catalogue product details."""
    name: str
    description: str
    price: str
    category: str
    color: str
    quantity: int


@dataclass(frozen=True)
class AddressData:
    """Postal address."""
    street: str
    city: str
    state: str
    zip_code: str
    country: str


def _apply_overrides(
    record_type: Type[R],
    generated: Dict[str, Any],
    overrides: Optional[Mapping[str, Any]],
) -> R:
    """Create a record from generated values with `overrides` applied on top."""
    overrides = dict(overrides or {})
    known = {f.name for f in fields(record_type)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(
            f"Unknown {record_type.__name__} field(s): {', '.join(unknown)}"
        )
    return record_type(**{**generated, **overrides})


# ================================================================================
# Factory
# ================================================================================

class DataFactory:
    """
    Faker-backed generator for storefront test data.

    Every call returns a new frozen record; nothing is shared between
    records, so building again never affects earlier results.
    """

    def __init__(self, seed: Optional[int] = None, locale: str = "en_US"):
        """
        Initialize factory with optional random seed.

        Args:
            seed: Random seed for reproducible data generation
            locale: Faker locale
        """
        self.faker = Faker(locale)
        if seed is not None:
            self.faker.seed_instance(seed)

    def user(self, **overrides: Any) -> UserData:
        fake = self.faker
        generated = {
            "first_name": fake.first_name(),
            "last_name": fake.last_name(),
            "email": fake.email(),
            "password": self.password(12),
            "company": fake.company(),
            "address": fake.street_address(),
            "address2": fake.secondary_address(),
            "city": fake.city(),
            "state": fake.state(),
            "zip_code": fake.zipcode(),
            "country": DEFAULT_COUNTRY,
            "phone": fake.phone_number(),
            "mobile_phone": fake.phone_number(),
            "alias": " ".join(fake.words(2)),
        }
        return _apply_overrides(UserData, generated, overrides)

    def product(self, **overrides: Any) -> ProductData:
        fake = self.faker
        name = " ".join([
            fake.random_element(PRODUCT_ADJECTIVES),
            fake.random_element(PRODUCT_MATERIALS),
            fake.random_element(PRODUCT_NAMES),
        ])
        generated = {
            "name": name,
            "description": fake.paragraph(nb_sentences=2),
            "price": f"{fake.random_int(100, 100000) / 100:.2f}",
            "category": fake.random_element(DEPARTMENTS),
            "color": fake.color_name(),
            "quantity": fake.random_int(1, 10),
        }
        return _apply_overrides(ProductData, generated, overrides)

    def address(self, **overrides: Any) -> AddressData:
        fake = self.faker
        generated = {
            "street": fake.street_address(),
            "city": fake.city(),
            "state": fake.state(),
            "zip_code": fake.zipcode(),
            "country": DEFAULT_COUNTRY,
        }
        return _apply_overrides(AddressData, generated, overrides)

    # ----------------------------------------------------------------------------
    # Single values
    # ----------------------------------------------------------------------------

    def email(self) -> str:
        return self.faker.email()

    def password(self, length: int = 12) -> str:
        """
        Alphanumeric password.

        From 3 characters on it holds at least one upper, one lower and one
        digit; shorter ones are drawn from the same alphabet without that
        guarantee.
        """
        if length < 3:
            return self.faker.lexify("?" * length, letters=string.ascii_letters + string.digits)
        return self.faker.password(length=length, special_chars=False)

    def phone_number(self) -> str:
        return self.faker.phone_number()

    def random_number(self, min_value: int = 1, max_value: int = 100) -> int:
        return self.faker.random_int(min_value, max_value)

    def random_string(self, length: int = 10) -> str:
        """Lowercase alphanumeric string."""
        return self.faker.lexify("?" * length, letters=string.ascii_lowercase + string.digits)

    def random_date(self, start: datetime, end: datetime) -> datetime:
        return self.faker.date_time_between(start_date=start, end_date=end)


# ================================================================================
# Convenience Functions
# ================================================================================

def build_user_data(
    overrides: Optional[Mapping[str, Any]] = None,
    factory: Optional[DataFactory] = None,
) -> UserData:
    """Build a fully populated UserData with optional field overrides."""
    return (factory or DataFactory()).user(**dict(overrides or {}))


def build_product_data(
    overrides: Optional[Mapping[str, Any]] = None,
    factory: Optional[DataFactory] = None,
) -> ProductData:
    """Build a fully populated ProductData with optional field overrides."""
    return (factory or DataFactory()).product(**dict(overrides or {}))


def build_address_data(
    overrides: Optional[Mapping[str, Any]] = None,
    factory: Optional[DataFactory] = None,
) -> AddressData:
    """Build a fully populated AddressData with optional field overrides."""
    return (factory or DataFactory()).address(**dict(overrides or {}))


def as_dict(record: Any) -> Dict[str, Any]:
    """Plain-dict copy of a record (for reporting / form filling)."""
    return asdict(record)


__all__ = [
    "AddressData",
    "DataFactory",
    "ProductData",
    "UserData",
    "as_dict",
    "build_address_data",
    "build_product_data",
    "build_user_data",
]
