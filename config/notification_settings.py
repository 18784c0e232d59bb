# Notification settings: module-level defaults plus the provider that reads
# overrides from the environment (.env is loaded on import).

import os
from typing import Any, Mapping

from dotenv import load_dotenv

load_dotenv()

# Content types (bundles) that generate notifications when the
# NOTIFICATION_CONTENT_TYPES environment variable is not set.
DEFAULT_CONTENT_TYPES = ["article", "blog"]

# Reserved accounts never targeted by notifications (anonymous, superuser).
RESERVED_USER_IDS = frozenset({0, 1})

# Delivery channel used for fan-out.
EMAIL_NOTIFIER = "email"

DEFAULT_SITE_BASE_URL = "https://example.com"
DEFAULT_FROM_EMAIL = "notifications@example.com"

TRUE_VALUES = {"1", "true", "yes", "on"}


class EnvConfigProvider:
    """
    Configuration provider backed by environment variables.

    Args:
        values: Optional explicit mapping used instead of os.environ
    """

    SKIP_PROCESSING_KEY = "NOTIFICATION_SKIP_PROCESSING"
    CONTENT_TYPES_KEY = "NOTIFICATION_CONTENT_TYPES"

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values = values

    def get(self, key: str, default: Any = None) -> Any:
        if self._values is not None:
            return self._values.get(key, default)
        return os.getenv(key, default)

    @property
    def skip_processing(self) -> bool:
        """Global switch to suppress notification processing."""
        try:
            value = self.get(self.SKIP_PROCESSING_KEY)
        except Exception as e:
            print(f"  ⚠️  Could not read {self.SKIP_PROCESSING_KEY}: {e}")
            return False

        if isinstance(value, bool):
            return value
        return str(value or "").strip().lower() in TRUE_VALUES

    @property
    def tracked_content_types(self) -> frozenset[str]:
        value = self.get(self.CONTENT_TYPES_KEY)
        if not value:
            return frozenset(DEFAULT_CONTENT_TYPES)
        if isinstance(value, str):
            value = value.split(",")
        return frozenset(bundle.strip() for bundle in value if bundle.strip())

    @property
    def site_base_url(self) -> str:
        return str(self.get("SITE_BASE_URL", DEFAULT_SITE_BASE_URL)).rstrip("/")

    @property
    def from_email(self) -> str:
        return str(self.get("NOTIFICATION_FROM_EMAIL", DEFAULT_FROM_EMAIL))
