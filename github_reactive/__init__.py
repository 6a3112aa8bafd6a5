"""
Observable wrappers around the awaitable GitHub client.

Every endpoint method returns a cold Observable: arguments are validated on
the call, the request runs per subscription, and results or errors arrive
through the stream.
"""

from .authorizations import ObservableAuthorizationsClient
from .client import ObservableGitHubClient
from .observable import Observable, Subscription
from .pagination import get_and_flatten_all_pages

__all__ = [
    "Observable",
    "ObservableAuthorizationsClient",
    "ObservableGitHubClient",
    "Subscription",
    "get_and_flatten_all_pages",
]
