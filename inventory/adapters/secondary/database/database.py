"""
Process-wide handle to the item database.

``InventoryDatabase.get_database()`` builds the database on first use and hands
the same instance to every later caller. When the stored schema version does
not match ``SCHEMA_VERSION`` the whole store is dropped and recreated empty;
there are no migrations.
"""

import logging
import os
import threading
from contextlib import contextmanager

from sqlalchemy import MetaData, create_engine, inspect
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from inventory.adapters.secondary.database.config import Base, DATABASE_URL, DB_ECHO, SCHEMA_VERSION
from inventory.adapters.secondary.database.sqlalchemy_repository import SQLAlchemyItemRepository
from inventory.core.live_query import InvalidationTracker

logger = logging.getLogger(__name__)


def _create_engine(url: str, echo: bool):
    database = make_url(url).database
    if not database or database == ":memory:":
        # one shared connection, otherwise every thread sees its own empty database
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo,
        )
    directory = os.path.dirname(database)
    if directory:
        os.makedirs(directory, exist_ok=True)
    return create_engine(url, connect_args={"check_same_thread": False}, echo=echo)


class InventoryDatabase:
    _instance = None
    _instance_lock = threading.Lock()

    def __init__(self, url: str = DATABASE_URL, echo: bool = DB_ECHO):
        self.url = url
        self.engine = _create_engine(url, echo)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.invalidation_tracker = InvalidationTracker()
        self._write_lock = threading.RLock()
        self._item_dao = None
        self._open()

    @classmethod
    def get_database(cls, url: str = None) -> "InventoryDatabase":
        """
        Returns the shared database, building it on first call.

        Args:
            url: Database URL used only by the call that builds the instance
        """
        instance = cls._instance
        if instance is not None:
            return instance
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls(url or DATABASE_URL)
                logger.info("Database ready at %s", cls._instance.engine.url)
            return cls._instance

    def _open(self):
        with self.engine.begin() as connection:
            stored_version = connection.exec_driver_sql("PRAGMA user_version").scalar()
            if stored_version == SCHEMA_VERSION:
                return
            existing_tables = inspect(connection).get_table_names()
            if existing_tables:
                logger.warning(
                    "Schema version %s does not match %s, dropping tables %s",
                    stored_version, SCHEMA_VERSION, existing_tables,
                )
                stored = MetaData()
                stored.reflect(bind=connection)
                stored.drop_all(bind=connection)
            Base.metadata.create_all(bind=connection)
            connection.exec_driver_sql(f"PRAGMA user_version = {SCHEMA_VERSION}")

    @contextmanager
    def session(self):
        """Session that holds the write lock, committing on success."""
        with self._write_lock:
            db = self.SessionLocal()
            try:
                yield db
                db.commit()
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def item_dao(self) -> SQLAlchemyItemRepository:
        if self._item_dao is None:
            self._item_dao = SQLAlchemyItemRepository(self)
        return self._item_dao
