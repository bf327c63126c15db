# app/organization/models.py
from sqlalchemy import Column, Integer, String
from app.core.database import Base

class Organization(Base):
    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    email = Column(String(255))
    phone = Column(String(255))

    def __str__(self):
        return self.name
