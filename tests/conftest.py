"""Test fixtures and configuration."""
import uuid
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from kitchen_ops.models import Base
from kitchen_ops.models.inventory import BranchInventory, IngredientMapping
from kitchen_ops.models.recipe import RecipeLine
from kitchen_ops.models.schedule import ProductionSchedule

CENTRAL_KITCHEN = "Central Kitchen"
SNAPSHOT_DATE = date(2026, 1, 14)


@pytest.fixture(scope="function")
def engine():
    """Create an in-memory SQLite engine for testing."""
    # Use check_same_thread=False for compatibility with FastAPI TestClient
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=OFF")
        cursor.close()

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    """Create a test database session."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


# ---------------------------------------------------------------------------
# Factory helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def make_day():
    """Build a schedule day from (recipe_name, quantity[, adjusted]) tuples."""
    def _make(day_date, *items):
        day_items = []
        for item in items:
            entry = {"recipeName": item[0], "quantity": item[1]}
            if len(item) > 2:
                entry["adjustedQuantity"] = item[2]
            day_items.append(entry)
        return {"date": day_date, "items": day_items}
    return _make


@pytest.fixture
def schedule_factory(db):
    """Factory to create production schedules."""
    def _create(schedule_id="week-1", days=None, **kwargs):
        schedule = ProductionSchedule(
            schedule_id=schedule_id,
            schedule_data={"weekStart": kwargs.pop("week_start", None), "days": days or []},
            **kwargs,
        )
        db.add(schedule)
        db.flush()
        return schedule
    return _create


@pytest.fixture
def recipe_line_factory(db):
    """Factory to create recipe rows (ingredients or sub-recipes)."""
    def _create(item, ingredient_name, quantity=1, unit="GM", item_type="ingredient"):
        line = RecipeLine(
            id=uuid.uuid4(),
            item=item,
            ingredient_name=ingredient_name,
            item_type=item_type,
            quantity=Decimal(str(quantity)),
            unit=unit,
        )
        db.add(line)
        db.flush()
        return line
    return _create


@pytest.fixture
def inventory_factory(db):
    """Factory to create stock count rows."""
    def _create(item, quantity, unit="GM", inventory_date=SNAPSHOT_DATE, branch=CENTRAL_KITCHEN, **kwargs):
        row = BranchInventory(
            item=item,
            quantity=Decimal(str(quantity)),
            unit=unit,
            inventory_date=inventory_date,
            branch=branch,
            **kwargs,
        )
        db.add(row)
        db.flush()
        return row
    return _create


@pytest.fixture
def mapping_factory(db):
    """Factory to create ingredient aliases."""
    def _create(recipe_ingredient_name, inventory_item_name, **kwargs):
        mapping = IngredientMapping(
            recipe_ingredient_name=recipe_ingredient_name,
            inventory_item_name=inventory_item_name,
            **kwargs,
        )
        db.add(mapping)
        db.flush()
        return mapping
    return _create
