"""Unit model: a property listing."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base
from backend.app.models.enums import Currency, UnitSaleType, UnitType, enum_values


class Unit(Base):
    __tablename__ = "units"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_units_price_non_negative"),
        CheckConstraint("area >= 1", name="ck_units_area_positive"),
        CheckConstraint("bedrooms >= 1", name="ck_units_bedrooms_positive"),
        CheckConstraint("bathrooms >= 1", name="ck_units_bathrooms_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    unit_code = Column(String(50), nullable=True, index=True)
    is_available = Column(Boolean, nullable=False, default=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True)
    unit_type = Column(
        Enum(UnitType, name="unit_type", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=UnitType.APARTMENT,
    )
    sale_type = Column(
        Enum(UnitSaleType, name="unit_sale_type", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=UnitSaleType.SALE,
    )
    location = Column(String(200), nullable=False)
    price = Column(Numeric(14, 2), nullable=False)
    currency = Column(
        Enum(Currency, name="currency", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=Currency.EGP,
    )
    area = Column(Integer, nullable=False)
    bedrooms = Column(Integer, nullable=False)
    bathrooms = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    owner_id = Column(Integer, ForeignKey("owners.id", ondelete="SET NULL"), nullable=True, index=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    project = relationship("Project", back_populates="units")
    owner = relationship("Owner", back_populates="units")
    created_by = relationship("User")
