"""GitHub OAuth 2.0 client implementation.

Implements the web application flow: redirect to GitHub, exchange the code
for an access token, then read the profile and the primary verified email.
"""

from urllib.parse import urlencode

import httpx
import logfire

from shelf.adapter.error import ProviderError
from shelf.domain.service.auth_service import OAuthClient
from shelf.domain.value.types import AuthProvider, OAuthProviderInfo


class GitHubOAuthClient(OAuthClient):
    """Base class for GitHub OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGitHubOAuthClient(GitHubOAuthClient):
    """GitHub OAuth 2.0 client."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ) -> None:
        """Initialize GitHub OAuth client.

        Args:
            client_id: GitHub OAuth app client ID
            client_secret: GitHub OAuth app client secret
            redirect_uri: Callback URL registered with GitHub
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

        # OAuth endpoints
        self.authorize_url = "https://github.com/login/oauth/authorize"
        self.token_url = "https://github.com/login/oauth/access_token"
        self.user_info_url = "https://api.github.com/user"
        self.user_emails_url = "https://api.github.com/user/emails"

    async def initiate_authorization(self, state: str) -> str:
        """Build the GitHub authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": "read:user user:email",
            "state": state,
            "allow_signup": "true",
        }

        auth_url = f"{self.authorize_url}?{urlencode(params)}"

        logfire.info(
            "GitHub OAuth authorization initiated",
            redirect_uri=self.redirect_uri,
        )

        return auth_url

    async def complete_authorization(self, code: str, state: str) -> OAuthProviderInfo:
        """Complete GitHub OAuth authorization flow.

        Args:
            code: Authorization code from GitHub callback
            state: State parameter echoed back by GitHub

        Returns:
            User information from GitHub

        Raises:
            ProviderError: If OAuth flow fails
        """
        access_token = await self._exchange_code_for_token(code, state)
        user_info = await self._get_json(self.user_info_url, access_token)

        email = user_info.get("email")
        if not email:
            email = await self._get_primary_email(access_token)

        logfire.info(
            "GitHub OAuth completed",
            login=user_info["login"],
            user_id=user_info["id"],
            has_email=email is not None,
        )

        return OAuthProviderInfo(
            provider=AuthProvider.GITHUB,
            provider_user_id=str(user_info["id"]),
            handle=user_info["login"],
            email=email,
            display_name=user_info.get("name") or user_info["login"],
            avatar_url=user_info.get("avatar_url"),
        )

    async def _exchange_code_for_token(self, code: str, state: str) -> str:
        """Exchange authorization code for access token.

        Raises:
            ProviderError: If token exchange fails
        """
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
            "state": state,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers={"Accept": "application/json"},
                    timeout=30.0,
                )

                if response.status_code != 200:
                    logfire.error(
                        "GitHub token exchange failed",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise ProviderError(
                        f"Token exchange failed: {response.status_code}"
                    )

                result = response.json()
                # GitHub reports bad codes with 200 and an error field
                if "access_token" not in result:
                    logfire.error(
                        "GitHub token exchange rejected",
                        error=result.get("error"),
                        description=result.get("error_description"),
                    )
                    raise ProviderError(
                        f"Token exchange rejected: {result.get('error', 'unknown')}"
                    )
                return result["access_token"]

        except httpx.HTTPError as e:
            logfire.error("GitHub token exchange HTTP error", error=str(e))
            raise ProviderError(f"HTTP error during token exchange: {e}")

    async def _get_primary_email(self, access_token: str) -> str | None:
        """Pick the primary verified address when the profile email is private."""
        emails = await self._get_json(self.user_emails_url, access_token)
        for entry in emails:
            if entry.get("primary") and entry.get("verified"):
                return entry.get("email")
        return None

    async def _get_json(self, url: str, access_token: str):
        """GET a GitHub API resource.

        Raises:
            ProviderError: If API request fails
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    url,
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "Accept": "application/vnd.github+json",
                    },
                    timeout=30.0,
                )

                if response.status_code != 200:
                    logfire.error(
                        "GitHub API request failed",
                        url=url,
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise ProviderError(
                        f"GitHub API request failed: {response.status_code}"
                    )

                return response.json()

        except httpx.HTTPError as e:
            logfire.error("GitHub API HTTP error", url=url, error=str(e))
            raise ProviderError(f"HTTP error calling GitHub API: {e}")


class MockGitHubOAuthClient(GitHubOAuthClient):
    """Mock GitHub OAuth client for testing.

    The authorization code selects the identity: code ``alice`` signs in as
    GitHub user ``alice`` with email ``alice@example.com``. A code of the
    form ``alice:noemail`` returns the same user without an email.
    """

    def __init__(self):
        """Initialize mock client without real OAuth configuration."""
        pass

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Mock authorization URL
        """
        return f"https://github.com/login/oauth/authorize?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> OAuthProviderInfo:
        """Return mock user information derived from the code.

        Args:
            code: Authorization code naming the mock user
            state: State parameter (unused in mock)

        Returns:
            Mock GitHub user information
        """
        login, _, flag = code.partition(":")
        return OAuthProviderInfo(
            provider=AuthProvider.GITHUB,
            provider_user_id=f"gh-{login}",
            handle=login,
            email=None if flag == "noemail" else f"{login}@example.com",
            display_name=login.capitalize(),
            avatar_url=f"https://avatars.example.com/{login}.png",
        )
