"""SQLAlchemy table definitions for ML storage.

These are thin persistence mappings. Domain logic lives in Pydantic models.
"""

from datetime import datetime

from sqlalchemy import (
    DateTime,
    Float,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class WordCategoryCountTable(Base):
    """Naive Bayes word frequencies per category."""

    __tablename__ = "word_category_counts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    word: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __table_args__ = (
        UniqueConstraint("word", "category", name="uq_word_category"),
        Index("ix_word_category_counts_category", "category"),
    )


class ModelPerformanceTable(Base):
    """Ensemble participant performance and weight."""

    __tablename__ = "model_performance"

    model_name: Mapped[str] = mapped_column(String(50), primary_key=True)
    correct_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_weight: Mapped[float] = mapped_column(Float, nullable=False, default=0.5)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
