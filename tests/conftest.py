"""
Shared fixtures: a throwaway SQLite database per test, seeded vendors,
users and menu items, and an HTTP client wired to the app.
"""
import os

# db.py refuses to import without a URL; tests build their own engines
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from foodcourt.auth.identity import IdentityClaims, Role, encode_identity
from foodcourt.db import build_engine, build_sessionmaker, create_db_and_tables, get_db
from foodcourt.main import app
from foodcourt.models.menu.menu_item import MenuItem, MenuCategory
from foodcourt.models.user import User
from foodcourt.models.vendor import Vendor


# ============================================================================
# DATABASE
# ============================================================================


@pytest_asyncio.fixture
async def engine(tmp_path):
    """File-backed so separate sessions really use separate connections."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'foodcourt.db'}")
    await create_db_and_tables(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# ============================================================================
# SEED DATA
# ============================================================================


@pytest_asyncio.fixture
async def vendor(db):
    vendor = Vendor(name="Warung Nasi Padang", location="Blok A-1", is_active=True)
    db.add(vendor)
    await db.commit()
    return vendor


@pytest_asyncio.fixture
async def other_vendor(db):
    vendor = Vendor(name="Kedai Mie Ayam", location="Blok A-2", is_active=True)
    db.add(vendor)
    await db.commit()
    return vendor


@pytest_asyncio.fixture
async def cashier(db):
    user = User(username="cashier", full_name="Kasir Utama", role=Role.CASHIER.value)
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def vendor_staff(db, vendor):
    user = User(username="padang_user", full_name="Pelayan Warung Padang", role=Role.VENDOR.value, vendor_id=vendor.id)
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def menu(db, vendor, other_vendor):
    """Two dishes and a drink for the main vendor, one dish elsewhere, one sold out."""
    items = {
        "rendang": MenuItem(vendor_id=vendor.id, name="Nasi Rendang", price=Decimal("25000"), category=MenuCategory.FOOD),
        "ayam_pop": MenuItem(vendor_id=vendor.id, name="Nasi Ayam Pop", price=Decimal("22000"), category=MenuCategory.FOOD),
        "es_teh": MenuItem(vendor_id=vendor.id, name="Es Teh Manis", price=Decimal("5000"), category=MenuCategory.DRINK),
        "sold_out": MenuItem(
            vendor_id=vendor.id, name="Gulai Kepala Ikan", price=Decimal("40000"),
            category=MenuCategory.FOOD, is_available=False,
        ),
        "mie_ayam": MenuItem(vendor_id=other_vendor.id, name="Mie Ayam Bakso", price=Decimal("18000"), category=MenuCategory.FOOD),
    }
    db.add_all(items.values())
    await db.commit()
    return items


# ============================================================================
# HTTP
# ============================================================================


@pytest_asyncio.fixture
async def client(session_factory):
    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def bearer(claims: IdentityClaims) -> dict:
    return {"Authorization": f"Bearer {encode_identity(claims)}"}


@pytest.fixture
def cashier_headers(cashier):
    return bearer(IdentityClaims(user_id=cashier.id, role=Role.CASHIER))


@pytest.fixture
def staff_headers(vendor_staff):
    return bearer(IdentityClaims(user_id=vendor_staff.id, role=Role.VENDOR, vendor_id=vendor_staff.vendor_id))


@pytest.fixture
def auth_headers():
    """Build Authorization headers for arbitrary claims."""
    return bearer
