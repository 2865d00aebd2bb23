# =============================================================================
# Account Model
# =============================================================================
# Represents one set of mail-access credentials: the address, an opaque
# secret, and the OAuth client id + refresh token the sync backend uses.
#
# IMPORTANT: The secret is never parsed or validated here. It is only kept so
# the user can copy it back out; it is not a login password for this program.
# =============================================================================

from dataclasses import dataclass


# How many characters of a refresh token to show before eliding it
TOKEN_PREVIEW_LENGTH = 20


@dataclass
class AccountRecord:
    """
    Represents an imported mail account.

    Attributes:
        address: The email address. Must be non-empty and contain '@'.
        secret: Opaque credential string (shown/copied, never interpreted).
        client_id: OAuth client id used to refresh access tokens.
        refresh_token: OAuth refresh token.

        id: Database primary key. None until saved to storage.
        mail_type: Provider family of the account (only "outlook" today).
        last_check_time: ISO-8601 timestamp of the last mailbox check.

    Example:
        >>> account = AccountRecord(
        ...     address="user@outlook.com",
        ...     secret="hunter2",
        ...     client_id="9e5f94bc-e8a4-4e73-b8be-63364c29d753",
        ...     refresh_token="M.C5_BAY.0.U.-Cm...",
        ... )
    """

    address: str
    secret: str
    client_id: str
    refresh_token: str

    # Database fields
    id: int | None = None
    mail_type: str = "outlook"
    last_check_time: str | None = None

    @property
    def is_valid(self) -> bool:
        """True when all four primary fields are present and the address has an '@'."""
        if not (self.address and self.secret and self.client_id and self.refresh_token):
            return False
        return "@" in self.address

    def masked_secret(self) -> str:
        """Returns the placeholder shown while secrets are hidden."""
        return "******"

    def short_token(self) -> str:
        """Returns the refresh token elided to its first characters."""
        return f"{self.refresh_token[:TOKEN_PREVIEW_LENGTH]}..."

    def __str__(self) -> str:
        return self.address

    def __repr__(self) -> str:
        # Never leak credentials into logs
        return (
            f"AccountRecord(id={self.id!r}, address={self.address!r}, "
            f"mail_type={self.mail_type!r})"
        )
