"""Test configuration and fixtures"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from uuid import uuid4

from app.main import app
from app.database import Base, get_db
from app.models.restaurant import Restaurant, RestaurantStaff, StaffRole
from app.models.menu import Menu, MenuSection, MenuItem, ItemModifier
from app.models.order import OrderItem
from app.models.user import User
from app.api.auth import get_password_hash, create_access_token
from app.services.access import RequestContext


@pytest.fixture
async def engine(tmp_path):
    """Fresh SQLite database file per test"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield engine
    
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(session_factory):
    """Session used by fixtures and assertions"""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def context_for(session_factory):
    """Build a RequestContext for a user on its own session.

    Service failures roll back that session without touching ``test_db``.
    """
    sessions = []

    def make(user: User) -> RequestContext:
        session = session_factory()
        sessions.append(session)
        return RequestContext(user_id=user.id, db=session)

    yield make

    for session in sessions:
        await session.close()


class CommitFailsSession(AsyncSession):
    """Session whose commit writes pending rows, then fails"""

    flushed_order_items = None

    async def commit(self):
        await self.flush()
        result = await self.execute(select(func.count()).select_from(OrderItem))
        self.flushed_order_items = result.scalar()
        raise RuntimeError("connection lost during commit")


@pytest.fixture
async def failing_context_for(engine):
    """Like ``context_for`` but every commit fails after flushing"""
    sessions = []

    def make(user: User) -> RequestContext:
        session = CommitFailsSession(bind=engine, expire_on_commit=False)
        sessions.append(session)
        return RequestContext(user_id=user.id, db=session)

    yield make

    for session in sessions:
        await session.close()


async def make_user(db, email: str, full_name: str = "Test User") -> User:
    user = User(
        id=uuid4(),
        email=email,
        hashed_password=get_password_hash("testpass123"),
        full_name=full_name,
        is_active=True,
    )
    db.add(user)
    await db.commit()
    return user


async def add_member(db, restaurant: Restaurant, user: User, role: StaffRole, activated: bool = True) -> RestaurantStaff:
    membership = RestaurantStaff(
        restaurant_id=restaurant.id,
        user_id=user.id,
        role=role,
        activated=activated,
    )
    db.add(membership)
    await db.commit()
    return membership


@pytest.fixture
async def owner(test_db):
    return await make_user(test_db, "owner@example.com", "Olivia Owner")


@pytest.fixture
async def outsider(test_db):
    return await make_user(test_db, "outsider@example.com", "Oscar Outsider")


@pytest.fixture
async def test_restaurant(test_db, owner):
    """A restaurant with its owner membership"""
    restaurant = Restaurant(
        id=uuid4(),
        name="Test Restaurant",
        type="Bistro",
        address="123 Test St",
        phone="5550001111",
        email="bistro@example.com",
        created_by_id=owner.id,
    )
    test_db.add(restaurant)
    await test_db.commit()
    await add_member(test_db, restaurant, owner, StaffRole.OWNER)
    return restaurant


@pytest.fixture
async def staff_user(test_db, test_restaurant):
    """Factory: user with a membership of the given role"""
    async def make(role: StaffRole, activated: bool = True) -> User:
        user = await make_user(test_db, f"{role.value}-{uuid4().hex[:8]}@example.com", f"{role.value.title()} User")
        await add_member(test_db, test_restaurant, user, role, activated)
        return user
    return make


@pytest.fixture
async def test_menu(test_db, test_restaurant):
    """Menu -> two sections -> items -> modifiers"""
    menu = Menu(id=uuid4(), restaurant_id=test_restaurant.id, name="Dinner")
    test_db.add(menu)
    await test_db.flush()

    mains = MenuSection(id=uuid4(), menu_id=menu.id, name="Mains", display_order=1)
    starters = MenuSection(id=uuid4(), menu_id=menu.id, name="Starters", display_order=0)
    test_db.add_all([mains, starters])
    await test_db.flush()

    burger = MenuItem(id=uuid4(), section_id=mains.id, name="Burger", price_cents=1200, display_order=0)
    pasta = MenuItem(id=uuid4(), section_id=mains.id, name="Pasta", price_cents=1400, display_order=1)
    soup = MenuItem(id=uuid4(), section_id=starters.id, name="Soup", price_cents=600, display_order=0)
    test_db.add_all([burger, pasta, soup])
    await test_db.flush()

    cheese = ItemModifier(id=uuid4(), menu_item_id=burger.id, name="Cheese", price_adjustment_cents=150)
    no_bun = ItemModifier(id=uuid4(), menu_item_id=burger.id, name="No Bun", price_adjustment_cents=-50)
    bread = ItemModifier(id=uuid4(), menu_item_id=soup.id, name="Bread", price_adjustment_cents=100)
    test_db.add_all([cheese, no_bun, bread])
    await test_db.commit()

    return {
        "menu": menu,
        "sections": {"mains": mains, "starters": starters},
        "items": {"burger": burger, "pasta": pasta, "soup": soup},
        "modifiers": {"cheese": cheese, "no_bun": no_bun, "bread": bread},
    }


@pytest.fixture
async def client(session_factory):
    """Create test client with a fresh session per request"""
    async def override_get_db():
        async with session_factory() as session:
            yield session
    
    app.dependency_overrides[get_db] = override_get_db
    
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    
    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}
