"""Option-system interfaces following Black Box Design principles."""
from typing import Any, Iterable, Optional, Protocol


class OptionContainer(Protocol):
    """
    Contract the module core consumes from the option system.

    The core calls the add_* methods once at construction and consults
    is_immutable() whenever a configuration key is written.
    """

    def add_options(self, specs: Optional[Iterable[Any]], owner: Any) -> None:
        """Register basic options."""
        ...

    def add_advanced_options(self, specs: Optional[Iterable[Any]], owner: Any) -> None:
        """Register advanced options."""
        ...

    def add_evasion_options(self, specs: Optional[Iterable[Any]], owner: Any) -> None:
        """Register evasion options."""
        ...

    def specs(self) -> Iterable[Any]:
        """All registered option specifications."""
        ...

    def is_immutable(self, name: str) -> bool:
        """Whether writes to the named configuration key must be rejected."""
        ...
