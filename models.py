"""Request/result types shared by the extraction client and the fallback generator."""

from dataclasses import dataclass
from enum import Enum

DEFAULT_PROTECTION_MESSAGE = "This website is protected from scraping"
DEFAULT_PROTECTION_TYPE = "unknown"
DEFAULT_REQUIRED_TIER = "BASIC"


@dataclass
class ExtractionRequest:
    """
    One call to the backend. Set increment_usage=False when re-displaying
    content the user already fetched (history, refetch) so usage is not counted twice.
    """
    url: str
    user_id: str | None = None
    increment_usage: bool = True

    def to_payload(self) -> dict:
        """JSON body for the scrape endpoint. Usage fields are only sent with a user id."""
        payload = {"url": self.url}
        if self.user_id:
            payload["userId"] = self.user_id
            payload["incrementUsage"] = self.increment_usage
        return payload


@dataclass
class ExtractionResult:
    content: str
    title: str
    source_url: str


@dataclass
class ProtectionDetails:
    message: str = DEFAULT_PROTECTION_MESSAGE
    protection_type: str = DEFAULT_PROTECTION_TYPE
    upgrade_required: bool = True
    required_tier: str = DEFAULT_REQUIRED_TIER

    @classmethod
    def from_payload(cls, data: dict) -> "ProtectionDetails":
        """Build from the backend's error payload; absent (or null) fields keep their defaults."""
        upgrade = data.get("upgradeRequired")
        return cls(
            message=data.get("message") or DEFAULT_PROTECTION_MESSAGE,
            protection_type=data.get("protectionType") or DEFAULT_PROTECTION_TYPE,
            upgrade_required=True if upgrade is None else bool(upgrade),
            required_tier=data.get("requiredTier") or DEFAULT_REQUIRED_TIER,
        )


class ProtectionError(Exception):
    """The target site blocks extraction (anti-scraping protection). Not retryable, no fallback."""

    def __init__(
        self,
        message: str = DEFAULT_PROTECTION_MESSAGE,
        protection_type: str = DEFAULT_PROTECTION_TYPE,
        upgrade_required: bool = True,
        required_tier: str = DEFAULT_REQUIRED_TIER,
    ):
        super().__init__(message)
        self.message = message
        self.protection_type = protection_type
        self.upgrade_required = upgrade_required
        self.required_tier = required_tier

    @classmethod
    def from_details(cls, details: ProtectionDetails) -> "ProtectionError":
        return cls(
            details.message,
            details.protection_type,
            details.upgrade_required,
            details.required_tier,
        )

    @property
    def details(self) -> ProtectionDetails:
        return ProtectionDetails(
            self.message, self.protection_type, self.upgrade_required, self.required_tier
        )


class ExtractionOutcome(str, Enum):
    """How a single backend call ended. Everything except SUCCESS and PROTECTED falls back."""
    SUCCESS = "success"
    MALFORMED_RESPONSE = "malformed_response"
    SERVER_ERROR = "server_error"
    PROTECTED = "protected"
    NETWORK_FAILURE = "network_failure"
    TIMED_OUT = "timed_out"


# Tagged result of ArticleClient.fetch: exactly one of these per call.

@dataclass
class Extracted:
    result: ExtractionResult
    outcome: ExtractionOutcome = ExtractionOutcome.SUCCESS

    @property
    def used_fallback(self) -> bool:
        return self.outcome is not ExtractionOutcome.SUCCESS


@dataclass
class Protected:
    details: ProtectionDetails
    outcome: ExtractionOutcome = ExtractionOutcome.PROTECTED
