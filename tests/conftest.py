"""Root conftest for all tests.

Every test gets its own in-memory SQLite database (foreign keys enabled),
so no cleanup is needed between tests.
"""

import uuid
from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from caisse_noire.db.models import Base
from caisse_noire.db.models import Sanction as SanctionRow
from caisse_noire.db.models import Team as TeamRow
from caisse_noire.db.models import User as UserRow
from caisse_noire.db.session import enable_sqlite_foreign_keys, get_db
from caisse_noire.sanctions.types import Sanction
from caisse_noire.teams.types import (
    BasicKind,
    MultiplicationKind,
    RegularIntervalsKind,
    Rule,
    RuleCategory,
    Team,
    TimeMultiplicationKind,
    TimeUnit,
)
from caisse_noire.users.types import User


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every thread of a test (StaticPool)."""
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Database session bound to the per-test engine."""
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def basic_rule() -> Rule:
    return Rule(
        id=uuid.uuid4(),
        name="Late to training",
        category=RuleCategory.TRAINING_DAY,
        description="Arriving after the warm-up started",
        kind=BasicKind(price=Decimal("2.5")),
    )


@pytest.fixture
def multiplication_rule() -> Rule:
    return Rule(
        id=uuid.uuid4(),
        name="Missed penalties",
        category=RuleCategory.GAME_DAY,
        description="Per missed penalty",
        kind=MultiplicationKind(price_to_multiply=Decimal("3.5")),
    )


@pytest.fixture
def time_multiplication_rule() -> Rule:
    return Rule(
        id=uuid.uuid4(),
        name="Minutes late",
        category=RuleCategory.GAME_DAY,
        description="Per minute late to the meeting point",
        kind=TimeMultiplicationKind(price_per_time_unit=Decimal("0.5"), time_unit=TimeUnit.MINUTE),
    )


@pytest.fixture
def regular_intervals_rule() -> Rule:
    return Rule(
        id=uuid.uuid4(),
        name="Membership",
        category=RuleCategory.TRAINING_DAY,
        description="Monthly contribution",
        kind=RegularIntervalsKind(price=Decimal("10"), interval_in_time_unit=1, time_unit=TimeUnit.MONTH),
    )


def insert_team(db_session, name: str, rules: list[Rule]) -> Team:
    row = TeamRow(id=uuid.uuid4(), name=name, rules=[rule.model_dump(mode="json") for rule in rules])
    db_session.add(row)
    db_session.commit()
    return Team.from_model(row)


def insert_user(db_session, team_id: uuid.UUID, email: str | None = None) -> User:
    row = UserRow(id=uuid.uuid4(), team_id=team_id, firstname="firstname", lastname="lastname", email=email)
    db_session.add(row)
    db_session.commit()
    return User.from_model(row)


@pytest.fixture
def team(db_session, basic_rule, multiplication_rule, time_multiplication_rule, regular_intervals_rule) -> Team:
    """Persisted team holding one rule of each kind."""
    return insert_team(
        db_session,
        "Test_team",
        [basic_rule, multiplication_rule, time_multiplication_rule, regular_intervals_rule],
    )


@pytest.fixture
def other_team(db_session) -> Team:
    return insert_team(db_session, "Test_team_2", [])


@pytest.fixture
def user(db_session, team) -> User:
    return insert_user(db_session, team.id)


@pytest.fixture
def other_user(db_session, team) -> User:
    return insert_user(db_session, team.id, email="other@example.com")


@pytest.fixture
def outsider(db_session, other_team) -> User:
    """Member of the second team."""
    return insert_user(db_session, other_team.id)


@pytest.fixture
def client(db_session):
    """API client whose requests use the test session."""
    from caisse_noire.main import app

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_sanction(db_session, basic_rule):
    """Factory inserting a BASIC sanction for a user on a given date."""

    def _make(user: User, created_at: date, price: Decimal = Decimal("2.5")) -> Sanction:
        row = SanctionRow(
            id=uuid.uuid4(),
            user_id=user.id,
            team_id=user.team_id,
            sanction_info={"associated_rule": str(basic_rule.id), "extra_info": {"type": "NONE"}},
            price=price,
            created_at=created_at,
        )
        db_session.add(row)
        db_session.commit()
        return Sanction.from_model(row)

    return _make
