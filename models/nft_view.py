from sqlalchemy import Column, Integer, String, DateTime
from db.base import Base

class NFTView(Base):
    __tablename__ = "nft_views"

    id = Column(Integer, primary_key=True, index=True)
    viewed_id = Column(String(64), nullable=False, index=True)
    viewed_serie = Column(String(64), nullable=False, index=True)
    viewer = Column(String(128), nullable=True)  # wallet id, when known
    viewer_ip = Column(String(64), nullable=True)
    date = Column(DateTime, nullable=False)  # naive UTC
