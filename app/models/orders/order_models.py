from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, CheckConstraint
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class Order(Base, TimestampMixin):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)
    status = Column(String(50), nullable=False, default="pending", index=True)
    total = Column(Numeric(10, 2), nullable=False, default=0)

    __table_args__ = (CheckConstraint("total >= 0", name="ck_order_total_non_negative"),)

    def __repr__(self):
        return f"<Order id={self.id} client_id={self.client_id} status={self.status}>"
