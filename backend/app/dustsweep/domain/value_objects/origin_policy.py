"""Cross-origin allow-list value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class OriginPolicy:
    """Ordered allow-list of origins permitted to call the API.

    Attributes:
        allowed_origins: Origin prefixes; the first one is the fallback.
    """

    allowed_origins: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.allowed_origins:
            raise ValueError("OriginPolicy requires at least one allowed origin")

    def resolve(self, origin: str | None) -> str:
        """Pick the Access-Control-Allow-Origin value for a request.

        Args:
            origin: The request's Origin header, possibly missing.

        Returns:
            The first allowed origin that prefixes `origin`, or the first
            allowed origin when none matches.
        """
        origin = origin or ""
        for allowed in self.allowed_origins:
            if origin.startswith(allowed):
                return allowed
        return self.allowed_origins[0]
