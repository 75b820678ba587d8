"""
OAuth2 token management for Coinbase ("Sign in with Coinbase")

Handles the authorization-code flow, token refresh and revocation on top of
Authlib's AsyncOAuth2Client. OAuthCbClient is an AccessTokenProvider, so it
can be handed straight to CbClient.
"""

import asyncio
import logging
import secrets
import time
from typing import Any, Awaitable, Callable, Optional, Set, Tuple
from urllib.parse import parse_qs, urlsplit

import httpx
from authlib.integrations.httpx_client import AsyncOAuth2Client
from authlib.integrations.httpx_client import OAuthError as AuthlibOAuthError
from pydantic import BaseModel, Field, ValidationError

from coinbase_v3.auth import AccessTokenProvider
from coinbase_v3.constants import AUTH_URL, DEFAULT_TIMEOUT, REVOKE_URL, TOKEN_REFRESH_MARGIN, TOKEN_URL
from coinbase_v3.exceptions import ConfigurationError, HttpError, InvalidScopeError, OAuthError
from coinbase_v3.scopes import is_valid_scope

logger = logging.getLogger(__name__)

REDIRECT_REPLY = "Go back to your terminal :)"


class OAuthToken(BaseModel):
    """Token endpoint response, plus the local time it was obtained"""

    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None  # seconds; Coinbase issues 2 hour tokens
    refresh_token: Optional[str] = None
    scope: Optional[str] = None
    obtained_at: float = Field(default_factory=time.time)

    @property
    def expires_at(self) -> Optional[float]:
        if self.expires_in is None:
            return None
        return self.obtained_at + self.expires_in

    def is_expired(self, margin: float = 0) -> bool:
        """True if the token expires within `margin` seconds. Tokens without expiry never expire."""
        expires_at = self.expires_at
        if expires_at is None:
            return False
        return time.time() + margin >= expires_at


class OAuthCbClient(AccessTokenProvider):
    """
    A simple client to manage OAuth2 access tokens and permissions

    Usage:
        async with OAuthCbClient(client_id, client_secret, "http://localhost:3001") as oauth:
            oauth.add_scope("wallet:accounts:read").add_scope("wallet:transactions:read")
            await oauth.authorize_once()
            async with CbClient(oauth) as client:
                ...
            await oauth.revoke_access()

    Access tokens are refreshed automatically when they are about to expire,
    as long as Coinbase issued a refresh token. Concurrent refreshes are
    collapsed into a single token request.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_url: str,
        refresh_margin: float = TOKEN_REFRESH_MARGIN,
        timeout: float = DEFAULT_TIMEOUT,
        **client_kwargs: Any,
    ):
        """
        Args:
            client_id: OAuth2 application id
            client_secret: OAuth2 application secret
            redirect_url: Redirect URI registered with the application
            refresh_margin: Refresh tokens expiring within this many seconds
            timeout: Token endpoint timeout in seconds
            client_kwargs: Passed to the underlying httpx client (e.g. transport)
        """
        if not client_id or not client_secret:
            raise ConfigurationError("OAuth client id and client secret are required")
        if not redirect_url:
            raise ConfigurationError("OAuth redirect url is required")

        self.client_id = client_id
        self.redirect_url = redirect_url
        self.refresh_margin = refresh_margin
        self.scopes: Set[str] = set()

        self._oauth = AsyncOAuth2Client(
            client_id=client_id,
            client_secret=client_secret,
            token_endpoint_auth_method="client_secret_post",
            revocation_endpoint_auth_method="client_secret_post",
            redirect_uri=redirect_url,
            timeout=timeout,
            **client_kwargs,
        )
        self._oauth.register_compliance_hook("access_token_response", self._check_token_response)
        self._oauth.register_compliance_hook("refresh_token_response", self._check_token_response)

        self._token: Optional[OAuthToken] = None
        self._lock = asyncio.Lock()
        self._refresh_task: Optional[asyncio.Future] = None

    @classmethod
    def from_settings(cls, settings=None, **kwargs) -> "OAuthCbClient":
        """Build from CB_OAUTH_* settings (defaults to the global settings)"""
        if settings is None:
            from coinbase_v3.config import settings

        return cls(
            settings.cb_oauth_client_id,
            settings.cb_oauth_client_secret,
            settings.cb_oauth_redirect_url,
            refresh_margin=settings.oauth_refresh_margin_seconds,
            timeout=settings.coinbase_request_timeout,
            **kwargs,
        )

    async def __aenter__(self) -> "OAuthCbClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        await self._oauth.aclose()

    # ---------------------------------------------------------------------
    # Scopes & authorization URL
    # ---------------------------------------------------------------------

    def add_scope(self, scope: str) -> "OAuthCbClient":
        """
        Add one permission to request. Chainable.

        Raises InvalidScopeError for scopes Coinbase does not document.
        """
        if not is_valid_scope(scope):
            raise InvalidScopeError(scope)
        self.scopes.add(scope)
        self._oauth.scope = " ".join(sorted(self.scopes))
        return self

    def authorization_url(self, state: Optional[str] = None) -> Tuple[str, str]:
        """
        Build the URL the user opens to grant access.

        Returns:
            Tuple of (url, csrf_state)
        """
        if state is None:
            state = secrets.token_urlsafe(16)
        return self._oauth.create_authorization_url(AUTH_URL, state=state)

    # ---------------------------------------------------------------------
    # Token endpoint
    # ---------------------------------------------------------------------

    @staticmethod
    def _check_token_response(response: httpx.Response) -> httpx.Response:
        if response.status_code != 200:
            logger.error(f"❌ OAuth token request failed: {response.status_code}")
            raise OAuthError(
                f"Token request failed ({response.status_code}): {response.text}", status_code=response.status_code
            )
        return response

    async def _token_call(self, send: Callable[[], Awaitable[Any]]) -> OAuthToken:
        """Run an Authlib token request and convert its result to an OAuthToken"""
        try:
            raw = await send()
        except AuthlibOAuthError as e:
            raise OAuthError(f"Token request rejected: {e}") from e
        except httpx.HTTPError as e:
            raise HttpError(f"Request to {TOKEN_URL} failed: {e}") from e
        except ValueError as e:
            raise OAuthError(f"Invalid token response: {e}") from e

        try:
            return OAuthToken.model_validate(dict(raw))
        except (TypeError, ValueError, ValidationError) as e:
            raise OAuthError(f"Invalid token response: {e}") from e

    async def exchange_code(self, code: str) -> OAuthToken:
        """Exchange an authorization code for access and refresh tokens"""
        token = await self._token_call(
            lambda: self._oauth.fetch_token(
                TOKEN_URL, grant_type="authorization_code", code=code, redirect_uri=self.redirect_url
            )
        )
        self._token = token
        logger.info(f"Obtained OAuth access token (expires in {token.expires_in}s)")
        return token

    async def _wait_for_redirect(self) -> Tuple[str, str]:
        """Serve one HTTP request on the redirect URL and return its (code, state)"""
        parts = urlsplit(self.redirect_url)
        if not parts.hostname or not parts.port:
            raise ConfigurationError(f"Redirect url needs an explicit host and port: {self.redirect_url}")

        loop = asyncio.get_running_loop()
        received: asyncio.Future = loop.create_future()

        async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
            try:
                request_line = (await reader.readline()).decode("latin-1")
                # Drain headers
                while (await reader.readline()) not in (b"\r\n", b"\n", b""):
                    pass

                body = REDIRECT_REPLY.encode()
                writer.write(b"HTTP/1.1 200 OK\r\ncontent-length: %d\r\n\r\n%s" % (len(body), body))
                await writer.drain()
            finally:
                writer.close()

            request_parts = request_line.split()
            if len(request_parts) < 2 or received.done():
                return
            query = parse_qs(urlsplit(request_parts[1]).query)
            received.set_result(query)

        server = await asyncio.start_server(handle, parts.hostname, parts.port)
        try:
            query = await received
        finally:
            server.close()
            await server.wait_closed()

        code = query.get("code", [""])[0]
        state = query.get("state", [""])[0]
        if not code:
            error = query.get("error", ["missing code"])[0]
            raise OAuthError(f"Authorization failed: {error}")
        return code, state

    async def authorize_once(self) -> "OAuthCbClient":
        """
        Run the authorization-code flow once.

        Prints the authorization URL, waits for Coinbase to redirect the browser
        to redirect_url, checks the CSRF state and exchanges the code for tokens.
        """
        url, expected_state = self.authorization_url()
        print(f"\nOpen this URL in your browser:\n{url}\n\n")

        code, state = await self._wait_for_redirect()
        if not secrets.compare_digest(state, expected_state):
            raise OAuthError("CSRF state mismatch in OAuth redirect")

        await self.exchange_code(code)
        return self

    # ---------------------------------------------------------------------
    # Refresh
    # ---------------------------------------------------------------------

    async def _refresh_token_grant(self) -> OAuthToken:
        current = self._token
        if current is None or not current.refresh_token:
            raise OAuthError("No refresh token available")

        token = await self._token_call(
            lambda: self._oauth.refresh_token(TOKEN_URL, refresh_token=current.refresh_token)
        )
        if not token.refresh_token:
            token = token.model_copy(update={"refresh_token": current.refresh_token})
        self._token = token
        logger.info(f"Refreshed OAuth access token (expires in {token.expires_in}s)")
        return token

    def _refresh_done(self, task: asyncio.Future):
        if self._refresh_task is task:
            self._refresh_task = None
        if not task.cancelled():
            # Mark retrieved; shielded waiters still receive it
            task.exception()

    async def refresh(self) -> OAuthToken:
        """
        Refresh the access token.

        The grant runs as its own task. Concurrent callers share it and all get
        its result (or its exception); cancelling one caller leaves the refresh
        running for the others.
        """
        async with self._lock:
            task = self._refresh_task
            if task is None:
                task = asyncio.ensure_future(self._refresh_token_grant())
                task.add_done_callback(self._refresh_done)
                self._refresh_task = task

        return await asyncio.shield(task)

    async def access_token(self, method: str = "GET", path: str = "") -> str:
        token = self._token
        if token is None:
            raise OAuthError("Not authorized yet: call authorize_once() or set_token() first")

        if token.refresh_token and token.is_expired(self.refresh_margin):
            logger.debug("OAuth access token about to expire, refreshing")
            token = await self.refresh()

        return token.access_token

    async def force_refresh(self) -> bool:
        if self._token is None or not self._token.refresh_token:
            return False
        await self.refresh()
        return True

    # ---------------------------------------------------------------------
    # Revocation & persistence
    # ---------------------------------------------------------------------

    async def revoke_access(self):
        """
        Revoke the obtained token so no one can use it afterwards.

        The refresh token is revoked when there is one, otherwise the access token.
        Without this, Coinbase access tokens expire after 2 hours.
        """
        token = self._token
        if token is None:
            raise OAuthError("No token to revoke")

        try:
            if token.refresh_token:
                response = await self._oauth.revoke_token(
                    REVOKE_URL, token=token.refresh_token, token_type_hint="refresh_token"
                )
            else:
                response = await self._oauth.revoke_token(REVOKE_URL, token=token.access_token)
        except httpx.HTTPError as e:
            raise HttpError(f"Request to {REVOKE_URL} failed: {e}") from e

        if response.status_code != 200:
            raise OAuthError(
                f"Token revocation failed ({response.status_code}): {response.text}",
                status_code=response.status_code,
            )

        self._token = None
        logger.info("OAuth access revoked")

    @property
    def token(self) -> Optional[OAuthToken]:
        return self._token

    def set_token(self, token: Any):
        """Restore a token saved earlier (an OAuthToken or its dict form)"""
        if token is not None and not isinstance(token, OAuthToken):
            token = OAuthToken.model_validate(token)
        self._token = token
