"""Exception types raised by the library layer."""


class AirssError(Exception):
    """Base class for all application errors."""


class ConfigError(AirssError):
    """Invalid or missing configuration (API key, report destination, prompt)."""


class ConstraintError(AirssError):
    """An article with the same GUID is already stored."""


class NotFoundError(AirssError):
    """No stored article has the requested GUID."""


class FeedError(AirssError):
    """The feed could not be fetched or parsed."""


class CompletionError(AirssError):
    """The completion API call failed."""


class MailError(AirssError):
    """The report email could not be sent."""


class ServerError(AirssError):
    """The web view could not bind its address."""
