"""Exception hierarchy for the mashup server and client."""


class MashupError(Exception):
    """Base exception for all mashup errors."""


class PostcodeInvalid(MashupError):
    """The provided string is not a well-formed UK postcode."""

    def __init__(self, postcode: str):
        self.postcode = postcode
        super().__init__(f"Invalid UK postcode: '{postcode}'")


class UpstreamError(MashupError):
    """
    A third-party lookup failed.

    *source* names the lookup ("geolocation", "weather", "crime") and the
    message is the cause as reported by the service or the transport.
    """

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(message)


class MashupAPIError(MashupError):
    """The mashup API answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)
