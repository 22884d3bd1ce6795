"""
Relational Storage Implementation (SQLite via SQLAlchemy)

DESIGN DECISION: One table per concern:
- "expenses": one row per expense, AUTOINCREMENT ids so a deleted id is
  never handed out again
- "goal": a single row pinned to id = 1 by a CHECK constraint

Tables are created idempotently and the goal row is inserted with
INSERT OR IGNORE on startup. There are no migrations.

Every operation runs in its own session scope: commit on success,
rollback on any error. SQLAlchemy errors and rows that no longer pass
model validation surface as StorageError. Amounts are stored as exact
decimal strings.
"""

from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from typing import Iterator, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import (
    CheckConstraint,
    Column,
    Integer,
    Text,
    create_engine,
    select,
)
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.types import TypeDecorator

from tripbudget.config import get_settings
from tripbudget.models.budget import Expense, ExpenseFields, Goal
from tripbudget.services.storage.interface import (
    ConnectionError,
    ExpenseStorageInterface,
    NotFoundError,
    StorageError,
)

GOAL_ROW_ID = 1
IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")

Base = declarative_base()


# =============================================================================
# TABLES
# =============================================================================

class DecimalText(TypeDecorator):
    """
    Decimal stored as its exact string form.

    SQLite has no native decimal type and NUMERIC columns round-trip
    through float, so amounts are kept as TEXT to survive unchanged.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        try:
            return Decimal(value)
        except InvalidOperation as e:
            raise StorageError(f"Stored amount is not a number: {value!r}") from e


class ExpenseRow(Base):
    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_expenses_quantity"),
        CheckConstraint(
            "CAST(unit_price AS REAL) >= 0",
            name="ck_expenses_unit_price",
        ),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(Text, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(DecimalText, nullable=False)
    subtotal = Column(DecimalText, nullable=False)


class GoalRow(Base):
    __tablename__ = "goal"
    __table_args__ = (
        CheckConstraint(f"id = {GOAL_ROW_ID}", name="ck_goal_singleton"),
    )

    id = Column(Integer, primary_key=True)
    target = Column(DecimalText, nullable=False, default=0)
    saved = Column(DecimalText, nullable=False, default=0)


def create_sqlite_engine(database_url: str) -> Engine:
    """Create an engine; in-memory URLs share one connection."""
    kwargs = {
        "connect_args": {"check_same_thread": False},
        "future": True,
    }
    if database_url in IN_MEMORY_URLS:
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


# =============================================================================
# STORAGE
# =============================================================================

class SQLiteStorage(ExpenseStorageInterface):
    """
    SQLite implementation of the budget store.

    Each write touches only the affected row.
    """

    backend_name = "sqlite"

    def __init__(
        self,
        database_url: Optional[str] = None,
        engine: Optional[Engine] = None,
    ):
        self._database_url = database_url or get_settings().storage.database_url
        self._engine = engine or create_sqlite_engine(self._database_url)
        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            future=True,
        )
        self.init_db()

    def init_db(self) -> None:
        """Create tables if they do not already exist and ensure the goal row."""
        try:
            Base.metadata.create_all(bind=self._engine)
        except OperationalError as e:
            raise ConnectionError(f"Could not open database {self._database_url}: {e}") from e
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to create tables: {e}") from e

        with self.session_scope() as session:
            session.execute(
                sqlite_insert(GoalRow)
                .values(id=GOAL_ROW_ID, target=0, saved=0)
                .on_conflict_do_nothing(index_elements=["id"])
            )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope around a series of operations."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Database operation failed: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @staticmethod
    def _row_to_expense(row: ExpenseRow) -> Expense:
        try:
            return Expense(
                id=row.id,
                description=row.description,
                quantity=row.quantity,
                unit_price=row.unit_price,
                subtotal=row.subtotal,
            )
        except PydanticValidationError as e:
            raise StorageError(f"Stored expense {row.id} is corrupt: {e}") from e

    @staticmethod
    def _get_row(session: Session, expense_id: int) -> ExpenseRow:
        row = session.get(ExpenseRow, expense_id)
        if row is None:
            raise NotFoundError(f"Expense not found: {expense_id}")
        return row

    def list_expenses(self) -> list[Expense]:
        with self.session_scope() as session:
            rows = session.scalars(select(ExpenseRow).order_by(ExpenseRow.id))
            return [self._row_to_expense(row) for row in rows]

    def create_expense(self, fields: ExpenseFields) -> Expense:
        with self.session_scope() as session:
            row = ExpenseRow(**fields.model_dump())
            session.add(row)
            session.flush()
            return self._row_to_expense(row)

    def update_expense(self, expense_id: int, fields: ExpenseFields) -> Expense:
        with self.session_scope() as session:
            row = self._get_row(session, expense_id)
            for field, value in fields.model_dump().items():
                setattr(row, field, value)
            session.flush()
            return self._row_to_expense(row)

    def delete_expense(self, expense_id: int) -> None:
        with self.session_scope() as session:
            row = self._get_row(session, expense_id)
            session.delete(row)

    def get_goal(self) -> Goal:
        with self.session_scope() as session:
            row = session.get(GoalRow, GOAL_ROW_ID)
            if row is None:
                return Goal()
            try:
                return Goal(target=row.target, saved=row.saved)
            except PydanticValidationError as e:
                raise StorageError(f"Stored goal is corrupt: {e}") from e

    def set_goal(self, goal: Goal) -> Goal:
        with self.session_scope() as session:
            row = session.get(GoalRow, GOAL_ROW_ID)
            if row is None:
                row = GoalRow(id=GOAL_ROW_ID)
                session.add(row)
            row.target = goal.target
            row.saved = goal.saved
        return goal

    def close(self) -> None:
        self._engine.dispose()
