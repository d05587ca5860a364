"""Relational repository over the Flask-SQLAlchemy session.

Every write commits immediately; a failed write is rolled back and
re-raised as ``StoreError`` classified as constraint (integrity or data
errors the row itself caused) or connectivity.
"""
import logging
import time
from contextlib import contextmanager

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError

from webapp.errors import StoreError

logger = logging.getLogger(__name__)


class Repository:
    def __init__(self, session):
        self.session = session

    @contextmanager
    def _query(self, label, write=False):
        started = time.perf_counter()
        try:
            yield
            if write:
                self.session.commit()
        except (IntegrityError, DataError) as e:
            self.session.rollback()
            logger.warning("%s violated a constraint: %s", label, e.orig)
            raise StoreError(StoreError.CONSTRAINT, str(e.orig)) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("%s failed: %s", label, e)
            raise StoreError(StoreError.CONNECTIVITY, str(e)) from e
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.debug("Query %s executed in %.2fms", label, elapsed_ms)

    def find(self, model, record_id):
        with self._query(f"find {model.__tablename__}"):
            return self.session.get(model, record_id)

    def find_all(self, model):
        with self._query(f"find_all {model.__tablename__}"):
            return self.session.query(model).all()

    def find_by(self, model, **criteria):
        with self._query(f"find_by {model.__tablename__}"):
            return self.session.query(model).filter_by(**criteria).first()

    def find_all_by(self, model, **criteria):
        with self._query(f"find_all_by {model.__tablename__}"):
            return self.session.query(model).filter_by(**criteria).all()

    def create(self, record):
        with self._query(f"create {record.__tablename__}", write=True):
            self.session.add(record)
            self.session.flush()
        return record

    def update(self, record, fields):
        """Apply ``fields`` (column name → value) to ``record`` and commit."""
        with self._query(f"update {record.__tablename__}", write=True):
            for name, value in fields.items():
                setattr(record, name, value)
            self.session.flush()
        return record

    def delete(self, record):
        with self._query(f"delete {record.__tablename__}", write=True):
            self.session.delete(record)
            self.session.flush()

    def delete_where(self, model, field, value):
        """Bulk delete rows whose ``field`` equals ``value``; returns the count."""
        with self._query(f"delete_where {model.__tablename__}", write=True):
            count = (
                self.session.query(model)
                .filter(getattr(model, field) == value)
                .delete()
            )
        return count
