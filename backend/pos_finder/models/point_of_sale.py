from sqlalchemy import Column, Float, Integer, Text
from sqlalchemy.orm import relationship

from pos_finder.core.db import Base


class PointOfSale(Base):
    __tablename__ = "points_of_sale"

    id = Column(Text, primary_key=True)          # feed identity, aggregation key
    type = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    address = Column(Text, nullable=True)

    lat = Column(Float, nullable=False)
    lon = Column(Float, nullable=False)

    services = Column(Integer, nullable=False)     # feed bitmask
    pay_methods = Column(Integer, nullable=False)  # feed bitmask

    remarks = Column(Text, nullable=True)
    link = Column(Text, nullable=True)

    opening_hours = relationship(
        "OpeningHours",
        back_populates="point_of_sale",
        cascade="all, delete-orphan",
        order_by="OpeningHours.id",
    )
