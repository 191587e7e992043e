from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


def CommitSession(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
