"""
Friends Service Exceptions

Custom exceptions for relationship state errors.
"""


class FriendsError(Exception):
    """Base exception for friends state errors"""
    pass


class FriendRequestNotFoundError(FriendsError):
    """Raised when accepting a request id that is not in the collection"""
    pass


class StorageError(FriendsError):
    """Raised when the durable store fails to read or write"""
    pass


class ProviderNotActiveError(FriendsError):
    """Raised when friends state is accessed outside a mounted provider"""
    pass
