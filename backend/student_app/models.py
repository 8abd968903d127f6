"""SQLModel data models.

Field constraints for students are enforced by the request schemas in
`schemas.py`; the tables themselves only guarantee primary key
uniqueness.
"""

from decimal import Decimal
from typing import Optional
from sqlmodel import SQLModel, Field


class Student(SQLModel, table=True):
    """A student record.

    Fields:
    - `password_hash`: salted hash of the submitted password (never store plaintext)
    - `percentage`: short free-form string such as `"85"`
    """
    __tablename__ = "tbl_student"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, max_length=20)
    password_hash: str
    branch: str
    percentage: str = Field(max_length=3)
    phone: str = Field(max_length=11)
    email: str


class ProductInfo(SQLModel, table=True):
    """Catalogue product row. Not exposed by any route."""
    __tablename__ = "product_info"

    product_id: str = Field(primary_key=True)
    product_name: Optional[str] = None
    product_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    product_stock: Optional[int] = None
    product_description: Optional[str] = None
    product_status: Optional[int] = None
    product_icon: Optional[str] = None
    category_type: Optional[int] = None
