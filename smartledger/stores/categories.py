import logging

from sqlalchemy.exc import IntegrityError

from ..errors import ConflictError, NotFoundError
from ..extensions import db
from ..models import Category
from ..patches import CategoryPatch
from ..validation import parse_name
from . import store_operation

logger = logging.getLogger(__name__)


@store_operation
def find_by_owner(owner_id: int) -> list[Category]:
    return Category.query.filter_by(user_id=owner_id).order_by(Category.name).all()


@store_operation
def find_by_id(owner_id: int, category_id: int) -> Category | None:
    return Category.query.filter_by(id=category_id, user_id=owner_id).first()


@store_operation
def names_by_id(owner_id: int) -> dict[int, str]:
    rows = db.session.query(Category.id, Category.name).filter(Category.user_id == owner_id).all()
    return {cid: name for cid, name in rows}


@store_operation
def create(owner_id: int, name: str) -> Category:
    cat = Category(user_id=owner_id, name=parse_name(name))
    db.session.add(cat)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.warning("Duplicate category name for user %s", owner_id)
        raise ConflictError("category already exists") from None
    logger.info("Category %s created for user %s", cat.id, owner_id)
    return cat


@store_operation
def update(owner_id: int, category_id: int, patch: CategoryPatch) -> Category:
    cat = find_by_id(owner_id, category_id)
    if cat is None:
        raise NotFoundError("not found")
    for field, value in patch.changes().items():
        setattr(cat, field, value)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("category already exists") from None
    return cat


@store_operation
def delete(owner_id: int, category_id: int) -> None:
    # Transactions and limits that point at the category are kept.
    deleted = Category.query.filter_by(id=category_id, user_id=owner_id).delete()
    if not deleted:
        raise NotFoundError("not found")
    db.session.commit()
    logger.info("Category %s deleted for user %s", category_id, owner_id)
