"""Recycler identity used by the claim workflow."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ActingRecycler:
    """The authenticated recycler performing an operation.

    Supplied by the authentication layer; domain services receive it as an
    explicit argument instead of reading request state.

    Attributes:
        id: Recycler ID.
        name: Display name, used in log messages.
    """

    id: str
    name: str

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Recycler ID is required")
