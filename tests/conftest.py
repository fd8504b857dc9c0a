"""Shared test fixtures"""
import itertools
from decimal import Decimal

import pytest

from variant_service.core.config import Config
from variant_service.models.variant import VariantGroup, VariantGroupKind, VariantOption
from variant_service.services.variant_service import VariantConfigurationService


@pytest.fixture
def id_factory():
    """Deterministic IDs: id1, id2, ..."""
    counter = itertools.count(1)
    return lambda: f"id{next(counter)}"


@pytest.fixture
def settings():
    """Settings with console logging off"""
    return Config(log_to_console=False, log_to_file=False)


@pytest.fixture
def changes():
    """Records every (groups, combinations) pair a listener receives"""
    return []


@pytest.fixture
def service(settings, id_factory, changes):
    """Service with base price 10.00 that always confirms deletes"""
    return VariantConfigurationService(
        base_price=Decimal("10.00"),
        confirm=lambda message: True,
        listeners=[lambda groups, combinations: changes.append((groups, combinations))],
        settings=settings,
        id_factory=id_factory,
    )


def _make_option(option_id, sku, price_modifier="0", stock=0, name=None):
    return VariantOption(
        id=option_id,
        name=name or sku.upper(),
        value=name or sku.upper(),
        sku=sku,
        price_modifier=Decimal(price_modifier),
        stock=stock,
    )


@pytest.fixture
def make_option():
    """Factory for options; name and value default to the upper-cased SKU"""
    return _make_option


@pytest.fixture
def size_group():
    """Size: S(s, +0, 20), M(m, +0, 15), L(l, +2, 10)"""
    return VariantGroup(
        id="size",
        name="Size",
        kind=VariantGroupKind.SIZE,
        options=[
            _make_option("s", "s", "0", 20),
            _make_option("m", "m", "0", 15),
            _make_option("l", "l", "2", 10),
        ],
    )


@pytest.fixture
def color_group():
    """Color: Red(red, +0, 10), Blue(blue, +1, 5)"""
    return VariantGroup(
        id="color",
        name="Color",
        kind=VariantGroupKind.COLOR,
        options=[
            _make_option("red", "red", "0", 10, name="Red"),
            _make_option("blue", "blue", "1", 5, name="Blue"),
        ],
    )


@pytest.fixture
def finish_group():
    """Finish group with no options"""
    return VariantGroup(id="finish", name="Finish")
