"""
Scholarship Entity

Reference data; the workflows read it but never change it.
"""

from decimal import Decimal
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Scholarship(SQLModel, table=True):
    __tablename__ = "scholarships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    type: str = Field(max_length=50)  # e.g. "academic_full", "economic_assistance"
    amount: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
