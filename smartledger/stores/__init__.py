"""Owner-scoped data access for categories, transactions and budgets.

Every function takes the owner id as its first argument and filters on it.
"""
import functools
import logging

from sqlalchemy.exc import SQLAlchemyError

from ..errors import StoreError
from ..extensions import db

logger = logging.getLogger(__name__)


def store_operation(func):
    """Roll back and re-raise database failures as :class:`StoreError`."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("Store operation %s failed", func.__qualname__)
            raise StoreError() from exc

    return wrapper
