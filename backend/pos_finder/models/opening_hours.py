from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, Text, Time
from sqlalchemy.orm import relationship

from pos_finder.core.db import Base


class OpeningHours(Base):
    __tablename__ = "opening_hours"
    __table_args__ = (
        CheckConstraint("day_from BETWEEN 0 AND 6", name="ck_opening_hours_day_from"),
        CheckConstraint("day_to BETWEEN 0 AND 6", name="ck_opening_hours_day_to"),
        Index("ix_opening_hours_days", "day_from", "day_to"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)  # insertion order = feed order
    point_of_sale_id = Column(
        Text,
        ForeignKey("points_of_sale.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    day_from = Column(Integer, nullable=False)  # 0=Sunday..6=Saturday
    day_to = Column(Integer, nullable=False)

    open_time = Column(Time, nullable=False)
    close_time = Column(Time, nullable=False)

    point_of_sale = relationship("PointOfSale", back_populates="opening_hours")
