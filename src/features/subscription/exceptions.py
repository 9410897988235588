"""Subscription-related exceptions."""

from src.shared.exceptions import ConflictException, NotFoundException


class SubscriptionNotFound(NotFoundException):
    def __init__(self):
        super().__init__(detail="Subscription not found")


class AlreadySubscribed(ConflictException):
    def __init__(self):
        super().__init__(detail="User is already subscribed to this podcast")
