"""Shared test fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import date, datetime
from decimal import Decimal
import uuid

from kaptal.database import Base, get_db
from kaptal.main import app
from kaptal.models import (
    Category,
    CategoryBudget,
    IncomeRule,
    RuleItem,
    SavingsGoal,
    Transaction,
    TransactionType,
)
from kaptal.security import create_access_token

USER_ID = "11111111-1111-1111-1111-111111111111"
OTHER_USER_ID = "22222222-2222-2222-2222-222222222222"


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user_id():
    return USER_ID


@pytest.fixture
def auth_headers():
    """Bearer token for the default test user."""
    return {"Authorization": f"Bearer {create_access_token(USER_ID, 'user@kaptal.test')}"}


@pytest.fixture
def other_auth_headers():
    """Bearer token for a second user, to check tenant isolation."""
    return {"Authorization": f"Bearer {create_access_token(OTHER_USER_ID)}"}


@pytest.fixture
def make_transaction(db_session):
    """Factory inserting a transaction for the default user."""
    def _make(amount, when, type=TransactionType.EXPENSE, user_id=USER_ID, **tags):
        txn = Transaction(
            id=str(uuid.uuid4()),
            user_id=user_id,
            description=tags.pop("description", "Compra"),
            amount=Decimal(str(amount)),
            type=type,
            date=when,
            **tags,
        )
        db_session.add(txn)
        db_session.commit()
        db_session.refresh(txn)
        return txn
    return _make


@pytest.fixture
def sample_category(db_session):
    """Create a sample category."""
    category = Category(
        id=str(uuid.uuid4()),
        user_id=USER_ID,
        name="Mercado",
        color="#22c55e",
        icon="🛒",
    )
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def sample_budget(db_session, sample_category):
    """A R$800 budget for the sample category in March 2025."""
    budget = CategoryBudget(
        id=str(uuid.uuid4()),
        user_id=USER_ID,
        category_id=sample_category.id,
        month=3,
        year=2025,
        amount=Decimal("800.00"),
    )
    db_session.add(budget)
    db_session.commit()
    db_session.refresh(budget)
    return budget


@pytest.fixture
def sample_rule(db_session):
    """'Custo Fixo' at 35% of a R$5000 base income in March 2025, with one item."""
    rule = IncomeRule(
        id=str(uuid.uuid4()),
        user_id=USER_ID,
        name="Custo Fixo",
        percentage=Decimal("35"),
        color="#f59e0b",
        icon="🏠",
        month=3,
        year=2025,
        base_income=Decimal("5000.00"),
    )
    rule.items = [RuleItem(id=str(uuid.uuid4()), name="Conta de água", amount=Decimal("80.00"))]
    db_session.add(rule)
    db_session.commit()
    db_session.refresh(rule)
    return rule


@pytest.fixture
def sample_goal(db_session):
    """Goal at R$1000 of R$1500."""
    goal = SavingsGoal(
        id=str(uuid.uuid4()),
        user_id=USER_ID,
        name="Reserva de emergência",
        target_amount=Decimal("1500.00"),
        current_amount=Decimal("1000.00"),
        deadline=date(2030, 12, 31),
        created_at=datetime(2025, 1, 1),
    )
    db_session.add(goal)
    db_session.commit()
    db_session.refresh(goal)
    return goal
