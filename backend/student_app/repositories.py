"""Repository classes encapsulating database operations.

Repositories return SQLModel objects and perform commits/refreshes
where appropriate. Paging is zero-based: page 0 holds the first
`size` rows.
"""

from typing import List, Optional
from sqlmodel import Session, select
from sqlalchemy import func
from . import models

SORTABLE_COLUMNS = ("id", "name", "branch", "percentage", "phone", "email")
MAX_OFFSET = 2**63 - 1


class StudentRepository:
    """CRUD and paged queries for `Student` rows."""
    def __init__(self, session: Session):
        self.session = session

    def save(self, student: models.Student) -> models.Student:
        """Insert or overwrite `student` and return the managed instance."""
        self.session.add(student)
        self.session.commit()
        self.session.refresh(student)
        return student

    def get(self, student_id: int) -> Optional[models.Student]:
        """Get a `Student` by primary key."""
        return self.session.get(models.Student, student_id)

    def list_all(self) -> List[models.Student]:
        """Return every student ordered by id."""
        stmt = select(models.Student).order_by(models.Student.id)
        return self.session.exec(stmt).all()

    def list_page(self, page: int, size: int, sort: Optional[str] = None) -> List[models.Student]:
        """Return at most `size` students from zero-based page `page`.

        `sort` names one of `SORTABLE_COLUMNS`; id order is used as the
        tiebreaker so pages are stable.
        """
        _check_page(page, size)
        stmt = select(models.Student)
        if sort:
            if sort not in SORTABLE_COLUMNS:
                raise ValueError(f"cannot sort by {sort!r}")
            stmt = stmt.order_by(getattr(models.Student, sort), models.Student.id)
        else:
            stmt = stmt.order_by(models.Student.id)
        stmt = stmt.offset(page * size).limit(size)
        return self.session.exec(stmt).all()

    def list_by_name(self, name: str, page: int, size: int) -> List[models.Student]:
        """Return one page of students whose name equals `name`."""
        _check_page(page, size)
        stmt = (
            select(models.Student)
            .where(models.Student.name == name)
            .order_by(models.Student.id)
            .offset(page * size)
            .limit(size)
        )
        return self.session.exec(stmt).all()

    def count(self) -> int:
        """Total number of stored students."""
        return self.session.exec(select(func.count()).select_from(models.Student)).one()

    def delete(self, student: models.Student) -> None:
        """Remove `student` and commit."""
        self.session.delete(student)
        self.session.commit()


def _check_page(page: int, size: int) -> None:
    if page < 0:
        raise ValueError("page must be >= 0")
    if size < 1:
        raise ValueError("size must be >= 1")
    # OFFSET is a signed 64-bit integer in SQLite
    if page * size > MAX_OFFSET:
        raise ValueError("page is out of range")
