from sqlalchemy import Column, Integer, String, Text
from db.base import Base

class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(100), unique=True, nullable=False, index=True)  # e.g., 'art', 'gaming'
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
