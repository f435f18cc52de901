from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from jobboard.db.base import Base, utc_now


class Company(Base):
    """
    Company posting jobs on the board.

    Attributes:
        id: Primary key
        name: Company name (unique)
        description: Optional free-text description
        logo_url: Optional URL of the company logo
        created_at: Timestamp when record was created
    """

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    logo_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    # Relationships
    jobs = relationship("Job", back_populates="company")
    members = relationship("User", back_populates="company")

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name='{self.name}')>"
