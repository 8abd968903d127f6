"""Business logic services used by HTTP controllers.

Services are intentionally thin: they turn validated request schemas
into `Student` rows, hash passwords and delegate persistence to
`StudentRepository`.
"""

from passlib.context import CryptContext
from typing import List, Optional
from sqlmodel import Session
from . import models, repositories, schemas
from .utils import logs

PWD_CTX = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class StudentService:
    """Student CRUD operations."""
    def __init__(self, session: Session):
        self.session = session
        self.repo = repositories.StudentRepository(session)

    def add(self, payload: schemas.StudentIn) -> models.Student:
        """Create a student from a validated payload.

        Returns the persisted `Student` with its generated id.
        """
        student = models.Student(
            name=payload.name,
            password_hash=PWD_CTX.hash(payload.password),
            branch=payload.branch,
            percentage=payload.percentage,
            phone=payload.phone,
            email=str(payload.email),
        )
        student = self.repo.save(student)
        logs.info(f"added student id={student.id} name={student.name}", tag="addStudent")
        return student

    def find_all(self) -> List[models.Student]:
        """Return every student ordered by id."""
        return self.repo.list_all()

    def find_by_id(self, student_id: int) -> Optional[models.Student]:
        """Return the student with `student_id` or `None`."""
        return self.repo.get(student_id)

    def query_by_page(self, page: int, size: int, sort: Optional[str] = None) -> List[models.Student]:
        """Return one zero-based page of students, optionally sorted by a column."""
        return self.repo.list_page(page, size, sort)

    def query_by_name(self, name: str, page: int, size: int) -> List[models.Student]:
        """Return one zero-based page of students named exactly `name`."""
        return self.repo.list_by_name(name, page, size)

    def update(self, payload: schemas.StudentUpdate) -> Optional[models.Student]:
        """Overwrite every field of an existing student.

        Returns `None` if no student has `payload.id`.
        """
        student = self.repo.get(payload.id)
        if student is None:
            return None
        student.name = payload.name
        student.password_hash = PWD_CTX.hash(payload.password)
        student.branch = payload.branch
        student.percentage = payload.percentage
        student.phone = payload.phone
        student.email = str(payload.email)
        student = self.repo.save(student)
        logs.info(f"updated student id={student.id}", tag="updateStudent")
        return student

    def delete_by_id(self, student_id: int) -> bool:
        """Delete a student; False when the id does not exist."""
        student = self.repo.get(student_id)
        if student is None:
            return False
        self.repo.delete(student)
        logs.info(f"deleted student id={student_id}", tag="deleteById")
        return True

    @staticmethod
    def verify_password(student: models.Student, password: str) -> bool:
        """Check `password` against the stored hash."""
        return PWD_CTX.verify(password, student.password_hash)
