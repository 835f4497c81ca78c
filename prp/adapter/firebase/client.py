"""Firebase Identity Toolkit client.

Email/password sign-up and sign-in through the Identity Toolkit REST API.
Credential checks happen entirely inside Firebase; the portal only sees
whether they succeeded and, if so, which principal signed in.
"""

import hashlib
from typing import Any

import httpx
import logfire

from prp.adapter.error import ProviderError
from prp.domain.service.auth_service import IdentityProvider
from prp.domain.value import AccountId, AuthOutcome, Email, Principal

# Firebase error codes mapped to messages safe to show to the user
ERROR_MESSAGES: dict[str, str] = {
    "EMAIL_EXISTS": "An account with this email already exists",
    "EMAIL_NOT_FOUND": "Invalid email or password",
    "INVALID_PASSWORD": "Invalid email or password",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password",
    "USER_DISABLED": "This account has been disabled",
    "WEAK_PASSWORD": "Password should be at least 6 characters",
    "INVALID_EMAIL": "Invalid email address",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts, please try again later",
    "OPERATION_NOT_ALLOWED": "Email/password sign-in is disabled",
}


def describe_error(code: str) -> str:
    """Turn a Firebase error code into a user-facing message.

    Firebase sometimes appends detail, e.g. 'WEAK_PASSWORD : Password should
    be at least 6 characters', so only the leading code is looked up.
    """
    key = code.split(":", 1)[0].strip()
    return ERROR_MESSAGES.get(key, "Authentication failed")


class FirebaseIdentityProvider(IdentityProvider):
    """Identity provider backed by the Firebase Identity Toolkit REST API."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Firebase client.

        Args:
            api_key: Firebase web API key
            base_url: Identity Toolkit base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def sign_up(self, email: Email, password: str) -> AuthOutcome:
        """Create an email/password user in Firebase."""
        return await self._authenticate("accounts:signUp", email, password)

    async def sign_in(self, email: Email, password: str) -> AuthOutcome:
        """Verify an email/password pair with Firebase."""
        return await self._authenticate(
            "accounts:signInWithPassword", email, password
        )

    async def sign_out(self, principal_id: AccountId) -> AuthOutcome:
        """Sign out a principal.

        Firebase ID tokens are never handed to clients; the portal session
        cookie is the only credential, so there is nothing to revoke here.
        """
        logfire.info("Firebase sign out", principal_id=principal_id)
        return AuthOutcome(success=True)

    async def _authenticate(
        self, endpoint: str, email: Email, password: str
    ) -> AuthOutcome:
        payload = {
            "email": email.root,
            "password": password,
            "returnSecureToken": True,
        }
        body = await self._post(endpoint, payload)

        error = body.get("error")
        if error:
            code = str(error.get("message", "UNKNOWN"))
            logfire.warn(
                "Firebase rejected credentials", endpoint=endpoint, code=code
            )
            return AuthOutcome(success=False, error_message=describe_error(code))

        local_id = body.get("localId")
        if not local_id:
            raise ProviderError(f"Firebase {endpoint} response missing localId")

        principal = Principal(
            id=AccountId(local_id), email=Email(body.get("email") or email.root)
        )
        logfire.info("Firebase authentication succeeded", endpoint=endpoint)
        return AuthOutcome(success=True, principal=principal)

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/{endpoint}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    url, params={"key": self.api_key}, json=payload
                )
        except httpx.HTTPError as e:
            logfire.error("Firebase HTTP error", endpoint=endpoint, error=str(e))
            raise ProviderError(f"HTTP error calling Firebase {endpoint}: {e}") from e

        if response.status_code >= 500:
            logfire.error(
                "Firebase server error",
                endpoint=endpoint,
                status_code=response.status_code,
            )
            raise ProviderError(f"Firebase {endpoint} failed: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(f"Firebase {endpoint} returned invalid JSON") from e


class MockIdentityProvider(IdentityProvider):
    """In-memory identity provider for tests and local development.

    Principal IDs are derived from the email so they are stable across
    sign-up and sign-in.
    """

    def __init__(self) -> None:
        self._passwords: dict[str, str] = {}

    @staticmethod
    def principal_id_for(email: Email) -> AccountId:
        digest = hashlib.sha256(email.root.encode("utf-8")).hexdigest()
        return AccountId(f"mock-{digest[:20]}")

    async def sign_up(self, email: Email, password: str) -> AuthOutcome:
        if email.root in self._passwords:
            return AuthOutcome(
                success=False, error_message=describe_error("EMAIL_EXISTS")
            )
        if len(password) < 6:
            return AuthOutcome(
                success=False, error_message=describe_error("WEAK_PASSWORD")
            )
        self._passwords[email.root] = password
        return AuthOutcome(
            success=True,
            principal=Principal(id=self.principal_id_for(email), email=email),
        )

    async def sign_in(self, email: Email, password: str) -> AuthOutcome:
        if self._passwords.get(email.root) != password:
            return AuthOutcome(
                success=False,
                error_message=describe_error("INVALID_LOGIN_CREDENTIALS"),
            )
        return AuthOutcome(
            success=True,
            principal=Principal(id=self.principal_id_for(email), email=email),
        )

    async def sign_out(self, principal_id: AccountId) -> AuthOutcome:
        return AuthOutcome(success=True)
