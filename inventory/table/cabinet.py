from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from inventory.db.base import Base
from inventory.core.core_config import settings


class Cabinet(Base):
    __tablename__ = "cabinets"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(settings.TABLE_MAX_LENGTH_NAME), nullable=False)
    description = Column(String(settings.TABLE_MAX_LENGTH_DESCRIPTION), nullable=True)
    photo = Column(String(settings.TABLE_MAX_LENGTH_LINK), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    items = relationship("Item", back_populates="cabinet", passive_deletes=True)

    def __repr__(self):
        return f"<Cabinet(id={self.id}, name='{self.name}')>"
