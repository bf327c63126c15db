# app/resource_category/models.py
from sqlalchemy import Boolean, Column, Integer, String
from app.core.database import Base

class ResourceCategory(Base):
    __tablename__ = "resource_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    active = Column(Boolean, default=True, nullable=False)

    def __str__(self):
        return self.name
