class NFTServiceError(Exception):
    """Coarse, user facing error raised by the service layer"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class IndexerError(Exception):
    """The indexer could not be reached or answered with an error"""

class NFTNotCreatedError(NFTServiceError):
    def __init__(self):
        super().__init__("NFT can't be created")

class LocalNFTLookupError(NFTServiceError):
    def __init__(self):
        super().__init__("Couldn't get mongo NFT")

class UserNotFoundError(Exception):
    """Wallet id has no local user record"""
