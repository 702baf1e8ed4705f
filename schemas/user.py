from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

class UserCreate(BaseModel):
    wallet_id: str = Field(alias="walletId")
    name: Optional[str] = None
    custom_url: Optional[str] = Field(None, alias="customUrl")
    bio: Optional[str] = None
    twitter_name: Optional[str] = Field(None, alias="twitterName")
    picture: Optional[str] = None
    banner: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

class UserResponse(BaseModel):
    id: int
    wallet_id: str = Field(serialization_alias="walletId")
    name: Optional[str] = None
    custom_url: Optional[str] = Field(None, serialization_alias="customUrl")
    bio: Optional[str] = None
    twitter_name: Optional[str] = Field(None, serialization_alias="twitterName")
    picture: Optional[str] = None
    banner: Optional[str] = None
    verified: bool = False
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True)

class UserStatsResponse(BaseModel):
    count_owned: int = Field(alias="countOwned")
    count_owned_listed: int = Field(alias="countOwnedListed")
    count_owned_unlisted: int = Field(alias="countOwnedUnlisted")
    count_created: int = Field(alias="countCreated")
    count_followers: int = Field(alias="countFollowers")
    count_followed: int = Field(alias="countFollowed")

    model_config = ConfigDict(populate_by_name=True)
