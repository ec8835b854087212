#!/usr/bin/env python3
"""
Seed script to create a demo restaurant, staff and menu
"""

import asyncio
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import get_password_hash
from app.models.restaurant import Restaurant, StaffRole
from app.models.user import User
from app.schemas.menu import MenuCreate, SectionCreate, MenuItemCreate, ModifierCreate, DietaryFlags
from app.schemas.restaurant import RestaurantCreate, StaffCreate, TimeRange, WeeklyHours
from app.services import menu_service, restaurant_service, staff_service
from app.services.access import RequestContext

DEMO_RESTAURANT = "Mario's Italian Kitchen"

LUNCH = TimeRange(open_hour=11, open_minute=0, close_hour=14, close_minute=30)
DINNER = TimeRange(open_hour=17, open_minute=0, close_hour=22, close_minute=0)

# section -> [(item fields, [(modifier name, price adjustment cents)])]
MENU = {
    "Appetizers": [
        ({"name": "Bruschetta", "description": "Grilled bread topped with fresh tomatoes, garlic, basil, and olive oil", "price_cents": 899,
          "ingredients": ["bread", "tomato", "garlic", "basil"], "allergens": ["gluten"],
          "dietary_flags": DietaryFlags(vegetarian=True, vegan=True, dairy_free=True)}, []),
        ({"name": "Calamari Fritti", "description": "Crispy fried calamari with marinara sauce", "price_cents": 1299,
          "allergens": ["shellfish", "gluten"]}, [("Extra Marinara", 100)]),
        ({"name": "Garlic Bread", "description": "Toasted bread with garlic butter and herbs", "price_cents": 599,
          "dietary_flags": DietaryFlags(vegetarian=True)}, [("Add Cheese", 150)]),
    ],
    "Pizza": [
        ({"name": "Margherita Pizza", "description": "Fresh mozzarella, tomato sauce, and basil", "price_cents": 1499,
          "preparation_time": 15, "dietary_flags": DietaryFlags(vegetarian=True)},
         [("Thin Crust", 0), ("Deep Dish", 200), ("Gluten-Free Crust", 300), ("Extra Cheese", 150)]),
        ({"name": "Pepperoni Pizza", "description": "Classic pepperoni with mozzarella cheese", "price_cents": 1699,
          "preparation_time": 15}, [("Thin Crust", 0), ("Deep Dish", 200), ("Extra Cheese", 150)]),
    ],
    "Pasta": [
        ({"name": "Spaghetti Bolognese", "description": "Spaghetti with rich meat sauce", "price_cents": 1599,
          "preparation_time": 12}, [("Gluten-Free Pasta", 250), ("Half Portion", -400)]),
        ({"name": "Fettuccine Alfredo", "description": "Fettuccine in creamy parmesan sauce", "price_cents": 1499,
          "dietary_flags": DietaryFlags(vegetarian=True)}, [("Add Chicken", 400)]),
    ],
    "Desserts": [
        ({"name": "Tiramisu", "description": "Classic Italian coffee-flavored dessert", "price_cents": 899}, []),
        ({"name": "Cannoli", "description": "Crispy shells filled with sweet ricotta cream", "price_cents": 699}, []),
    ],
}


async def _user(db: AsyncSession, email: str, password: str, full_name: str) -> User:
    user = User(email=email, hashed_password=get_password_hash(password), full_name=full_name)
    db.add(user)
    await db.commit()
    return user


async def seed_demo_data(db: AsyncSession) -> Optional[Restaurant]:
    """Seed demo data; returns None when it already exists"""
    result = await db.execute(select(Restaurant).where(Restaurant.name == DEMO_RESTAURANT))
    if result.scalar_one_or_none():
        print("Demo data already exists. Skipping...")
        return None

    print("Creating demo users...")
    owner = await _user(db, "mario@marios-kitchen.com", "mario123", "Mario Rossi")
    await _user(db, "luigi@marios-kitchen.com", "luigi123", "Luigi Verdi")

    ctx = RequestContext(user_id=owner.id, db=db)

    print("Creating demo restaurant...")
    week = {day: [LUNCH, DINNER] for day in ("tuesday", "wednesday", "thursday", "friday", "saturday")}
    restaurant = await restaurant_service.create_restaurant(
        ctx,
        RestaurantCreate(
            name=DEMO_RESTAURANT,
            type="Italian",
            address="123 Main St",
            phone="5551234567",
            email="hello@marios-kitchen.com",
            tax_rate=0.0875,
            opening_hours=WeeklyHours(sunday=[DINNER], **week),
        ),
    )
    await staff_service.add_staff(
        ctx,
        restaurant.id,
        StaffCreate(email="luigi@marios-kitchen.com", role=StaffRole.SERVER),
    )

    print("Creating menu...")
    menu = await menu_service.add_menu(ctx, restaurant.id, MenuCreate(name="Dinner"))
    item_count = 0
    for display_order, (section_name, items) in enumerate(MENU.items()):
        section = await menu_service.add_section(
            ctx, menu.id, SectionCreate(name=section_name, display_order=display_order)
        )
        for item_order, (item_fields, modifiers) in enumerate(items):
            item = await menu_service.add_item(
                ctx, section.id, MenuItemCreate(display_order=item_order, **item_fields)
            )
            item_count += 1
            for name, adjustment in modifiers:
                await menu_service.add_modifier(
                    ctx, item.id, ModifierCreate(name=name, price_adjustment_cents=adjustment)
                )

    print(f"""
Demo data created successfully!

Restaurant: {DEMO_RESTAURANT}
  ID: {restaurant.id}

Users:
  Owner:
    Email: mario@marios-kitchen.com
    Password: mario123

  Server:
    Email: luigi@marios-kitchen.com
    Password: luigi123

Menu: {len(MENU)} sections, {item_count} items
""")
    return restaurant


async def main():
    from app.database import SessionLocal, engine, Base
    import app.models  # noqa: F401  registers tables

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        await seed_demo_data(db)


if __name__ == "__main__":
    asyncio.run(main())
