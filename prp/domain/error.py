"""Domain layer errors.

Every failure an operation can report is one of five kinds:

- ValidationError: malformed or missing input, never retried
- AuthorizationError: caller lacks trust state or ownership, never retried
- ConflictError: input collides with current state (duplicates, spent codes)
- NotFoundError: a referenced entity does not exist
- TransientStoreError: the document store timed out or is unavailable
"""


class DomainError(Exception):
    """Base domain error."""

    pass


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class IncompleteSubmissionError(ValidationError):
    """Raised when a required press release field is blank."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Field '{field}' is required")


class WordLimitExceededError(ValidationError):
    """Raised when the narrative fields exceed the word limit."""

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"Word count {count} exceeds limit ({limit})")


class SelfEndorsementError(ValidationError):
    """Raised when a member asks themselves for an endorsement."""

    def __init__(self) -> None:
        super().__init__("You cannot request an endorsement from yourself")


# ---------------------------------------------------------------------------
# Authorization
# ---------------------------------------------------------------------------


class AuthorizationError(DomainError):
    """Caller lacks the trust state or ownership an operation requires."""

    pass


class NotAuthorizedError(AuthorizationError):
    """Raised when a principal may not act on a resource."""

    def __init__(
        self,
        resource: str,
        resource_id: str,
        user_id: str,
        reason: str | None = None,
    ):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        message = f"User {user_id} is not authorized to modify {resource} {resource_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Conflicts
# ---------------------------------------------------------------------------


class ConflictError(DomainError):
    """Input conflicts with the current state of the system."""

    pass


class DuplicateAccountError(ConflictError):
    """Raised when signing up a principal that already has an account."""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account already exists: {account_id}")


class DuplicateEmailError(ConflictError):
    """Raised when an email address is already registered to another account."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


class DuplicatePendingRequestError(ConflictError):
    """Raised when a pending endorsement request already exists for a pair."""

    def __init__(self, requester_id: str, target_id: str):
        self.requester_id = requester_id
        self.target_id = target_id
        super().__init__(
            "You already have a pending endorsement request with this member"
        )


class TargetNotApprovedError(ConflictError):
    """Raised when the endorsement target is missing or not approved."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"No approved member found for {target}")


class AlreadyResolvedError(ConflictError):
    """Raised when resolving an endorsement request that is no longer pending."""

    def __init__(self, request_id: str, status: str):
        self.request_id = request_id
        self.status = status
        super().__init__(f"Endorsement request {request_id} is already {status}")


class EndorsementQuotaExceededError(ConflictError):
    """Raised when an endorser has used up this period's endorsements."""

    def __init__(self, account_id: str, limit: int):
        self.account_id = account_id
        self.limit = limit
        super().__init__(
            f"Account {account_id} has reached its endorsement limit ({limit})"
        )


class CodeExpiredError(ConflictError):
    """Raised when redeeming an invite code past its expiry."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Invite code {code} has expired")


class CodeExhaustedError(ConflictError):
    """Raised when an invite code has no uses left or is inactive."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Invite code {code} has no remaining uses")


class DomainMismatchError(ConflictError):
    """Raised when an invite code is restricted to another email domain."""

    def __init__(self, code: str, expected_domain: str, actual_domain: str):
        self.code = code
        self.expected_domain = expected_domain
        self.actual_domain = actual_domain
        super().__init__(
            f"Invite code {code} is restricted to @{expected_domain} addresses"
        )


class CodeCollisionError(ConflictError):
    """Raised when no unique invite code could be generated."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Could not generate a unique invite code in {attempts} attempts")


# ---------------------------------------------------------------------------
# Lookup and store failures
# ---------------------------------------------------------------------------


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class CodeNotFoundError(NotFoundError):
    """Raised when an invite code does not exist."""

    def __init__(self, code: str):
        super().__init__("Invite code", code)


class TransientStoreError(DomainError):
    """Document store timeout or unavailability; safe to retry with backoff."""

    pass


class AuthenticationFailedError(DomainError):
    """Raised when the identity provider rejects credentials."""

    def __init__(self, message: str | None = None):
        super().__init__(message or "Authentication failed")


class NotAuthenticatedError(DomainError):
    """Raised when an operation requires a signed-in principal."""

    def __init__(self) -> None:
        super().__init__("Not authenticated")
