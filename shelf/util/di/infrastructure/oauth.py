"""OAuth infrastructure provider."""

from dishka import Scope, provide

from shelf.adapter.github.client import GitHubOAuthClient
from shelf.domain.service.auth_service import OAuthClient
from shelf.domain.value import AuthProvider
from shelf.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Provider that aggregates all OAuth clients into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self,
        github_oauth_client: GitHubOAuthClient,
    ) -> dict[AuthProvider, OAuthClient]:
        """Provide dictionary of all OAuth clients by provider.

        Args:
            github_oauth_client: GitHub OAuth client (specific type)

        Returns:
            Dictionary mapping AuthProvider to OAuthClient
        """
        return {AuthProvider.GITHUB: github_oauth_client}
