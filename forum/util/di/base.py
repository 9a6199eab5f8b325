"""Provider base class and selection errors for the forum container."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with swappable (production / mock) providers
Component = Literal["persistence"]


class DependencyInjectionError(Exception):
    """Raised when no provider matches a requested component variant."""


class ProviderBase(Provider):
    """Provider carrying the metadata used to pick production or mock variants.

    Concrete providers leave ``__mock_component__`` unset. A mockable
    component is a base class naming its component; its subclasses set
    ``__is_mock__`` to tell the variants apart.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
