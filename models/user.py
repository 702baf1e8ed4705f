from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean
from sqlalchemy.sql import func
from db.base import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    wallet_id = Column(String(128), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    custom_url = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    twitter_name = Column(String(255), nullable=True)
    picture = Column(Text, nullable=True)
    banner = Column(Text, nullable=True)
    verified = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
