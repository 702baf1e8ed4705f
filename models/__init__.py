from models.user import User
from models.follow import Follow
from models.category import Category
from models.nft import NFT, NFTCategory
from models.nft_view import NFTView

__all__ = ["User", "Follow", "Category", "NFT", "NFTCategory", "NFTView"]
