"""
SQLAlchemy ORM models for the furiwake resource database.

Tables:
    kanji                       one row per character and table (general/name)
    kanji_reading               readings of a kanji, in dictionary order
    special_expression          multi-character expressions
    special_expression_reading  readings of an expression, in dictionary order
"""

from typing import List

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class KanjiRow(Base):
    """
    A kanji reading profile.

    The same character may appear twice: once in the general table and
    once in the name table (is_name=True).
    """
    __tablename__ = "kanji"
    __table_args__ = (UniqueConstraint("char", "is_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    char: Mapped[str] = mapped_column(String(2), index=True)
    is_name: Mapped[bool] = mapped_column(Boolean, default=False)

    readings: Mapped[List["KanjiReading"]] = relationship(
        back_populates="kanji",
        order_by="KanjiReading.ord",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<KanjiRow {self.char} is_name={self.is_name}>"


class KanjiReading(Base):
    __tablename__ = "kanji_reading"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    kanji_id: Mapped[int] = mapped_column(ForeignKey("kanji.id", ondelete="CASCADE"), index=True)
    text: Mapped[str] = mapped_column(String)
    ord: Mapped[int] = mapped_column(Integer, default=0)
    name_only: Mapped[bool] = mapped_column(Boolean, default=False)  # nanori

    kanji: Mapped[KanjiRow] = relationship(back_populates="readings")


class SpecialExpressionRow(Base):
    __tablename__ = "special_expression"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    text: Mapped[str] = mapped_column(String, unique=True, index=True)

    readings: Mapped[List["SpecialExpressionReading"]] = relationship(
        back_populates="expression",
        order_by="SpecialExpressionReading.ord",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<SpecialExpressionRow {self.text}>"


class SpecialExpressionReading(Base):
    __tablename__ = "special_expression_reading"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    expression_id: Mapped[int] = mapped_column(
        ForeignKey("special_expression.id", ondelete="CASCADE"), index=True
    )
    text: Mapped[str] = mapped_column(String)
    ord: Mapped[int] = mapped_column(Integer, default=0)

    expression: Mapped[SpecialExpressionRow] = relationship(back_populates="readings")
