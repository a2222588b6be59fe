from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from blogcms.core.rate_limit import rate_limit
from blogcms.db.session import get_session
from blogcms.models.category import Category

router = APIRouter(dependencies=[Depends(rate_limit)])


@router.get("")
def read_categories(session: Session = Depends(get_session)):
    """Categories are seeded at startup and read-only through the API."""
    categories = session.exec(select(Category).order_by(Category.id)).all()
    return {"categories": categories}
