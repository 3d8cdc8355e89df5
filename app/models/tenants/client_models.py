from sqlalchemy import Column, Integer, String, ForeignKey, Table
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


user_clients = Table(
    "user_clients",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("client_id", Integer, ForeignKey("clients.id", ondelete="CASCADE"), primary_key=True),
)


class Client(Base, TimestampMixin):
    """Tenant. Locations, products and orders hang off a client."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String(150), nullable=False, unique=True, index=True)

    def __repr__(self):
        return f"<Client id={self.id} name={self.name}>"
