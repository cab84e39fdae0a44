"""Exception hierarchy for stablecoin tracker."""


class TrackerError(Exception):
    """Base class for all tracker errors."""


class MissingCredentials(TrackerError):
    """Required credential is not configured; raised before any network call."""

    def __init__(self, setting: str, command: str) -> None:
        self.setting = setting
        self.command = command
        super().__init__(f"Missing credentials: {setting} is required for '{command}'")


class ProviderUnavailable(TrackerError):
    """Provider answered with a non-OK status."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Provider unavailable: HTTP {status_code} from {url}")


class StoreUpdateFailure(TrackerError):
    """Updating a single store record failed."""

    def __init__(self, record_id: str, reason: str) -> None:
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"Failed to update record {record_id}: {reason}")
