from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index, CheckConstraint
from app.core.db import Base
from app.models.base.mixins import TimestampMixin, AuditMixin


class Product(Base, TimestampMixin, AuditMixin):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    sku = Column(String(255), nullable=False, unique=True, index=True)
    code = Column(String(255), nullable=False)
    barcode = Column(String(255), nullable=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    # centimetres
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    depth = Column(Integer, nullable=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("width IS NULL OR width >= 0", name="ck_product_width_non_negative"),
        CheckConstraint("height IS NULL OR height >= 0", name="ck_product_height_non_negative"),
        CheckConstraint("depth IS NULL OR depth >= 0", name="ck_product_depth_non_negative"),
        Index("ix_product_client_name", "client_id", "name"),
    )

    def __repr__(self):
        return f"<Product id={self.id} sku={self.sku} client_id={self.client_id}>"
