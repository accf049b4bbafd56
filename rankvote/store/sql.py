"""Managed relational database storage through SQLAlchemy.

Elections are kept in a single ``elections`` table, one row per election
with the whole aggregate in a JSON column.
"""

import datetime
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import JSON, DateTime, String, create_engine, delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from rankvote.store.core import ElectionRepository


class Base(DeclarativeBase):
    pass


class ElectionRow(Base):
    """One stored election aggregate."""

    __tablename__ = 'elections'

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )


class SqlElectionRepository(ElectionRepository):
    """Store elections in a relational database.

    :param engine: An SQLAlchemy engine or a database URL to create one from.
    :param create_tables: Whether to create the ``elections`` table if it
        does not exist yet.
    """
    backend_name = 'sql'
    errors = (SQLAlchemyError, )

    def __init__(self,
                 engine: Union[Engine, str],
                 create_tables: bool = True,
                 ):
        if isinstance(engine, str):
            engine = create_engine(engine)
        self.engine = engine
        if create_tables:
            Base.metadata.create_all(self.engine)

    def load_record(self, election_id: str) -> Optional[Dict[str, Any]]:
        with Session(self.engine) as session:
            row = session.get(ElectionRow, election_id)
            return row.data if row is not None else None

    def load_all_records(self) -> List[Dict[str, Any]]:
        with Session(self.engine) as session:
            return list(session.scalars(select(ElectionRow.data)))

    def store_record(self, election_id: str, record: Dict[str, Any]) -> None:
        with Session(self.engine) as session, session.begin():
            session.merge(ElectionRow(
                id=election_id,
                data=record,
                updated_at=datetime.datetime.now(datetime.timezone.utc),
            ))

    def remove_record(self, election_id: str) -> None:
        with Session(self.engine) as session, session.begin():
            session.execute(
                delete(ElectionRow).where(ElectionRow.id == election_id)
            )
