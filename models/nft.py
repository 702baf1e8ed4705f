from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from db.base import Base

class NFT(Base):
    """Local enrichment record for an NFT living on chain"""
    __tablename__ = "nfts"

    id = Column(Integer, primary_key=True, index=True)
    chain_id = Column(String(64), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    category_links = relationship(
        "NFTCategory",
        back_populates="nft",
        order_by="NFTCategory.id",
        cascade="all, delete-orphan",
    )

    @property
    def categories(self):
        """Category slots in insertion order; unresolved codes are None"""
        return [link.category for link in self.category_links]

class NFTCategory(Base):
    __tablename__ = "nft_categories"

    id = Column(Integer, primary_key=True, index=True)
    nft_id = Column(Integer, ForeignKey("nfts.id"), nullable=False, index=True)
    # Null when the code given at creation did not match any category
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)

    # Relationships
    nft = relationship("NFT", back_populates="category_links")
    category = relationship("Category")
