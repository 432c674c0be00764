# scripts/seed.py
import asyncio
import argparse
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.future import select

from foodcourt.auth.identity import IdentityClaims, Role, encode_identity
from foodcourt.db import async_session, create_db_and_tables
from foodcourt.models.menu.menu_item import MenuItem, MenuCategory
from foodcourt.models.user import User
from foodcourt.models.vendor import Vendor

# 🎯 VENDORS TO SEED (each with one staff account and a starter menu)
VENDORS_TO_SEED = [
    {
        "name": "Warung Nasi Padang",
        "description": "Masakan Padang autentik dengan cita rasa tradisional",
        "location": "Blok A-1",
        "staff": {"username": "padang_user", "full_name": "Pelayan Warung Padang"},
        "menu": [
            ("Nasi Rendang", "Nasi putih dengan rendang daging sapi", "25000", MenuCategory.FOOD),
            ("Nasi Ayam Pop", "Nasi dengan ayam pop dan sambal", "22000", MenuCategory.FOOD),
            ("Es Teh Manis", "Teh manis dingin", "5000", MenuCategory.DRINK),
        ],
    },
    {
        "name": "Kedai Mie Ayam",
        "description": "Mie ayam dan bakso dengan kuah yang gurih",
        "location": "Blok A-2",
        "staff": {"username": "mieayam_user", "full_name": "Pelayan Kedai Mie Ayam"},
        "menu": [
            ("Mie Ayam Bakso", "Mie ayam dengan bakso sapi", "18000", MenuCategory.FOOD),
            ("Pangsit Goreng", "Pangsit goreng renyah", "8000", MenuCategory.SNACK),
            ("Es Jeruk", "Jeruk peras dingin", "7000", MenuCategory.DRINK),
        ],
    },
]

CASHIER = {"username": "cashier", "full_name": "Kasir Utama"}


async def seed():
    await create_db_and_tables()

    async with async_session() as session:
        user_count = (await session.execute(select(func.count(User.id)))).scalar_one()
        if user_count:
            print("⚠️  Database already seeded, skipping.")
            return

        cashier = User(username=CASHIER["username"], full_name=CASHIER["full_name"], role=Role.CASHIER.value)
        session.add(cashier)

        staff_users = []
        for vendor_data in VENDORS_TO_SEED:
            vendor = Vendor(
                name=vendor_data["name"],
                description=vendor_data["description"],
                location=vendor_data["location"],
                is_active=True,
            )
            session.add(vendor)
            await session.flush()  # populate vendor.id

            staff = User(
                username=vendor_data["staff"]["username"],
                full_name=vendor_data["staff"]["full_name"],
                role=Role.VENDOR.value,
                vendor_id=vendor.id,
            )
            session.add(staff)
            staff_users.append(staff)

            for name, description, price, category in vendor_data["menu"]:
                session.add(
                    MenuItem(
                        vendor_id=vendor.id,
                        name=name,
                        description=description,
                        price=Decimal(price),
                        category=category,
                        is_available=True,
                    )
                )
            print(f"🏪 Created vendor: {vendor.name} (id={vendor.id})")

        await session.commit()
        print("✅ Done seeding.\n")

        # Dev tokens so the API can be exercised without an identity provider
        print(f"🔑 {cashier.username}: {encode_identity(IdentityClaims(cashier.id, Role.CASHIER))}")
        for staff in staff_users:
            token = encode_identity(IdentityClaims(staff.id, Role.VENDOR, staff.vendor_id))
            print(f"🔑 {staff.username}: {token}")


def main():
    parser = argparse.ArgumentParser(description="Seed the food court database with sample vendors and menus.")
    parser.parse_args()
    asyncio.run(seed())


if __name__ == "__main__":
    main()
