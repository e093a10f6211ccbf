"""Path parameter parsing into value objects."""

from typing import Callable, TypeVar

from productboards.domain.exceptions import DomainValidationError

T = TypeVar("T")


def parse_id(factory: Callable[[str], T], raw: str, label: str = "id") -> T:
    """Wrap a raw path segment; malformed ids are an InvalidArgument."""
    try:
        return factory(raw)
    except (TypeError, ValueError) as e:
        raise DomainValidationError(f"Invalid {label}: {raw}") from e
