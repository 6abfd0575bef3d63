"""
Row store for relationship records, built on SQLAlchemy Core.

The client speaks in flat dictionaries matching the ``relationships``
table and reports every outcome as a Result. Database exceptions are
mapped onto ``StoreErrorKind`` here and never leave the client.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    func,
    insert,
    or_,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.pool import StaticPool

from ..result import Result, err, ok
from ..schema.relationship import Direction, ReviewStatus
from .errors import StoreError, StoreErrorKind


def _in_clause(column: str, values) -> str:
    quoted = ", ".join(f"'{v.value}'" for v in values)
    return f"{column} IN ({quoted})"


metadata = MetaData()

relationships_table = Table(
    "relationships",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("model_a", String(32), nullable=False),
    Column("model_b", String(32), nullable=False),
    Column("relationship_type", String(32), nullable=False),
    Column("direction", String(16), nullable=False),
    Column("confidence", Float, nullable=False),
    Column("logical_derivation", Text, nullable=False),
    Column("has_literature_support", Integer, nullable=False, server_default="0"),
    Column("literature_citation", Text),
    Column("literature_url", Text),
    Column("empirical_observation", Text),
    Column("validated_by", String(128), nullable=False),
    Column("validated_at", String(64), nullable=False),
    Column("review_status", String(16), nullable=False, server_default="pending"),
    Column("notes", Text),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
    Column("updated_at", DateTime, server_default=func.current_timestamp()),
    CheckConstraint("model_a <> model_b", name="ck_relationships_distinct_models"),
    CheckConstraint(_in_clause("direction", Direction), name="ck_relationships_direction"),
    CheckConstraint(_in_clause("review_status", ReviewStatus), name="ck_relationships_review_status"),
    CheckConstraint("has_literature_support IN (0, 1)", name="ck_relationships_support_flag"),
    Index("idx_relationships_model_a", "model_a"),
    Index("idx_relationships_model_b", "model_b"),
    Index("idx_relationships_type", "relationship_type"),
    Index("idx_relationships_status", "review_status"),
)


def create_store_engine(database_url: str, timeout: float = 5.0) -> Engine:
    """
    Create the long-lived engine shared by every store client.

    For SQLite the timeout is the busy timeout; in-memory databases are
    pinned to one connection so every caller sees the same tables.
    """
    if database_url.startswith("sqlite"):
        kwargs: Dict[str, Any] = {
            "connect_args": {"timeout": timeout, "check_same_thread": False},
        }
        if database_url in ("sqlite://", "sqlite:///:memory:") or ":memory:" in database_url:
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_timeout=timeout, pool_pre_ping=True)


def _is_duplicate(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "unique" in message or "duplicate" in message or "primary key" in message


def _to_store_error(exc: Exception, relationship_id: Optional[str]) -> StoreError:
    if isinstance(exc, IntegrityError):
        if _is_duplicate(exc):
            return StoreError(
                StoreErrorKind.DUPLICATE,
                f"Relationship already exists: {relationship_id}",
                relationship_id,
            )
        return StoreError(StoreErrorKind.CONSTRAINT, str(exc.orig), relationship_id)
    if isinstance(exc, (OperationalError, PoolTimeoutError)):
        return StoreError(
            StoreErrorKind.UNAVAILABLE,
            f"Store unavailable: {exc}",
            relationship_id,
        )
    return StoreError(StoreErrorKind.UNEXPECTED, f"{type(exc).__name__}: {exc}", relationship_id)


class RelationshipStoreClient:
    """Result-returning access to the ``relationships`` table."""

    def __init__(self, engine: Engine):
        """
        Args:
            engine: Shared SQLAlchemy engine; the client never disposes it.
        """
        self.engine = engine
        self.table = relationships_table

    def create_tables(self) -> None:
        metadata.create_all(self.engine)

    def create_relationship(self, fields: Dict[str, Any]) -> Result[Dict[str, Any], StoreError]:
        """
        Insert one flat relationship row and read it back.

        Args:
            fields: Column values, including ``id``

        Returns:
            Ok with the stored row, or Err with a StoreError
        """
        relationship_id = fields.get("id")
        try:
            with self.engine.begin() as conn:
                conn.execute(insert(self.table).values(**fields))
                row = conn.execute(
                    select(self.table).where(self.table.c.id == relationship_id)
                ).mappings().first()
        except SQLAlchemyError as e:
            return err(_to_store_error(e, relationship_id))

        if row is None:
            return err(StoreError(
                StoreErrorKind.UNEXPECTED,
                "Relationship not found after insert",
                relationship_id,
            ))
        return ok(dict(row))

    def get_relationship(self, relationship_id: str) -> Result[Optional[Dict[str, Any]], StoreError]:
        """Fetch one row by id; Ok(None) when it does not exist."""
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    select(self.table).where(self.table.c.id == relationship_id)
                ).mappings().first()
        except SQLAlchemyError as e:
            return err(_to_store_error(e, relationship_id))
        return ok(dict(row) if row is not None else None)

    def list_relationships(
        self,
        model: Optional[str] = None,
        relationship_type: Optional[str] = None,
        review_status: Optional[str] = None,
        limit: Optional[int] = 50,
        offset: int = 0,
    ) -> Result[List[Dict[str, Any]], StoreError]:
        """
        List rows matching every given filter, newest validation first.

        Args:
            model: Only rows where this code is model_a or model_b
            relationship_type: Only rows of this type
            review_status: Only rows in this review state
            limit: Maximum rows returned, None for no limit
            offset: Rows skipped before the first returned
        """
        query = select(self.table)
        if model:
            query = query.where(or_(self.table.c.model_a == model, self.table.c.model_b == model))
        if relationship_type:
            query = query.where(self.table.c.relationship_type == relationship_type)
        if review_status:
            query = query.where(self.table.c.review_status == review_status)
        query = query.order_by(
            self.table.c.validated_at.desc(),
            self.table.c.created_at.desc(),
            self.table.c.id,
        ).offset(offset)
        if limit is not None:
            query = query.limit(limit)

        try:
            with self.engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as e:
            return err(_to_store_error(e, None))
        return ok([dict(row) for row in rows])
