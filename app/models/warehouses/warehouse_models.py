from sqlalchemy import Column, Integer, String, Enum, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin, AuditMixin
from app.models.enums.dimension_type import DimensionType


def _dimension_type_column():
    return Column(Enum(DimensionType, native_enum=False, length=20), nullable=True)


class Warehouse(Base, TimestampMixin, AuditMixin):
    """Storage slots are addressed as aisle / bay / level / bin; each axis is configured independently."""

    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True)
    name = Column(String(150), nullable=False)
    location_id = Column(Integer, ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False, index=True)

    aisle_type = _dimension_type_column()
    aisle_count = Column(Integer, nullable=True)
    bay_type = _dimension_type_column()
    bay_count = Column(Integer, nullable=True)
    level_type = _dimension_type_column()
    level_count = Column(Integer, nullable=True)
    bin_type = _dimension_type_column()
    bin_count = Column(Integer, nullable=True)

    location = relationship("Location", lazy="selectin")
    exclusions = relationship(
        "WarehouseExclusion",
        back_populates="warehouse",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="WarehouseExclusion.id",
    )

    def __repr__(self):
        return f"<Warehouse id={self.id} name={self.name} location_id={self.location_id}>"


class WarehouseExclusion(Base, TimestampMixin, AuditMixin):
    """Range rule over the slot matrix. A null *_from leaves that dimension unconstrained."""

    __tablename__ = "warehouse_exclusions"

    id = Column(Integer, primary_key=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id", ondelete="CASCADE"), nullable=False, index=True)

    aisle_from = Column(String(50), nullable=True)
    aisle_to = Column(String(50), nullable=True)
    bay_from = Column(String(50), nullable=True)
    bay_to = Column(String(50), nullable=True)
    level_from = Column(String(50), nullable=True)
    level_to = Column(String(50), nullable=True)
    bin_from = Column(String(50), nullable=True)
    bin_to = Column(String(50), nullable=True)

    warehouse = relationship("Warehouse", back_populates="exclusions", lazy="noload")

    __table_args__ = (
        CheckConstraint(
            "aisle_from IS NOT NULL OR aisle_to IS NOT NULL OR bay_from IS NOT NULL OR bay_to IS NOT NULL "
            "OR level_from IS NOT NULL OR level_to IS NOT NULL OR bin_from IS NOT NULL OR bin_to IS NOT NULL",
            name="ck_warehouse_exclusion_not_empty",
        ),
    )

    def __repr__(self):
        return f"<WarehouseExclusion id={self.id} warehouse_id={self.warehouse_id}>"
