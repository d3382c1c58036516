"""SQLAlchemy models for the assetsync history database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class SyncRun(Base):
    """One sync of one observed asset."""

    __tablename__ = "sync_runs"

    id = Column(Integer, primary_key=True)
    serial = Column(String, nullable=False, index=True)
    succeeded = Column(Boolean, nullable=False)
    error_kind = Column(String, nullable=True)
    error_message = Column(String, nullable=True)
    asset_id = Column(Integer, nullable=True)
    recorded_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    operations = relationship(
        "SyncOperation",
        back_populates="run",
        cascade="all, delete-orphan",
        order_by="SyncOperation.position",
    )


class SyncOperation(Base):
    """Remote write performed during a sync run."""

    __tablename__ = "sync_operations"

    id = Column(Integer, primary_key=True)
    run_id = Column(Integer, ForeignKey("sync_runs.id"), nullable=False)
    position = Column(Integer, nullable=False)
    action = Column(String, nullable=False)
    entity_type = Column(String, nullable=False)
    status = Column(String, nullable=False)
    remote_id = Column(Integer, nullable=True)
    entity_name = Column(String, nullable=True)

    # Operations keep the order they were performed in
    __table_args__ = (UniqueConstraint("run_id", "position", name="uq_run_position"),)

    # Relationships
    run = relationship("SyncRun", back_populates="operations")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
