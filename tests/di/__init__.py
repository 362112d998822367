"""Mock providers for testing."""

from .email import MockEmailProvider
from .github import MockGitHubProvider
from .persistence import MockPersistenceProvider
from .storage import MockStorageProvider
from .container import build_test_container

__all__ = [
    "MockEmailProvider",
    "MockGitHubProvider",
    "MockPersistenceProvider",
    "MockStorageProvider",
    "build_test_container",
]
