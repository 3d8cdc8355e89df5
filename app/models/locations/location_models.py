from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin, AuditMixin


class Location(Base, TimestampMixin, AuditMixin):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True)
    name = Column(String(150), nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)

    client = relationship("Client", lazy="selectin")

    def __repr__(self):
        return f"<Location id={self.id} name={self.name} client_id={self.client_id}>"
