from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from inventory.db.base import Base
from inventory.core.core_config import settings


class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(settings.TABLE_MAX_LENGTH_NAME), nullable=False)
    description = Column(String(settings.TABLE_MAX_LENGTH_DESCRIPTION), nullable=True)
    photo = Column(String(settings.TABLE_MAX_LENGTH_LINK), nullable=True)
    cabinet_id = Column(Integer, ForeignKey("cabinets.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    cabinet = relationship("Cabinet", back_populates="items", foreign_keys=[cabinet_id])

    def __repr__(self):
        return f"<Item(id={self.id}, name='{self.name}', cabinet_id={self.cabinet_id})>"
