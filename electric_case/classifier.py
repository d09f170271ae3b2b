"""Classification port: deciding which case style a token should take.

The engine never decides styles itself. It calls a `Classifier` with the
token's offsets and lookback index and treats the answer as authoritative.
Language profiles supply classifiers through the `ProfileRegistry`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .config import CaseConfig
from .exceptions import UnknownProfileError
from .models import CaseStyle

if TYPE_CHECKING:
    from .session import Session


@runtime_checkable
class Classifier(Protocol):
    """Decide the case style for the token at ``[start, end)``."""

    def classify(self, start: int, end: int, lookback: int) -> CaseStyle: ...


ClassifyFunction = Callable[[int, int, int], CaseStyle]


class FunctionClassifier:
    """Adapt a plain ``(start, end, lookback) -> CaseStyle`` callable."""

    def __init__(self, function: ClassifyFunction):
        self.function = function

    def classify(self, start: int, end: int, lookback: int) -> CaseStyle:
        return self.function(start, end, lookback)

    def __repr__(self) -> str:
        name = getattr(self.function, "__name__", repr(self.function))
        return f"FunctionClassifier({name})"


class ConstantClassifier:
    """Always answer with the same style."""

    def __init__(self, style: CaseStyle):
        self.style = style

    def classify(self, start: int, end: int, lookback: int) -> CaseStyle:
        return self.style

    def __repr__(self) -> str:
        return f"ConstantClassifier({self.style.name})"


class DeclarationClassifier:
    """Convert declarations, and other occurrences only when allowed.

    `is_declaration` inspects the token (usually through the host) and
    reports whether it sits in declaration position. Tokens that are not
    declarations get `style` only when the session's `convert_calls` switch
    is on; otherwise they are left alone.

    Args:
        is_declaration: Predicate over ``(start, end, lookback)``.
        style: Style applied to eligible tokens.
        config_source: Returns the session's effective configuration.

    Examples:
        DeclarationClassifier(lambda s, e, n: n == 0, CaseStyle.CAMEL, session.effective_config)
    """

    def __init__(
        self,
        is_declaration: Callable[[int, int, int], bool],
        style: CaseStyle,
        config_source: Callable[[], CaseConfig],
    ):
        self.is_declaration = is_declaration
        self.style = style
        self.config_source = config_source

    def classify(self, start: int, end: int, lookback: int) -> CaseStyle:
        if self.is_declaration(start, end, lookback):
            return self.style
        if self.config_source().convert_calls:
            return self.style
        return CaseStyle.NO_CONVERT


def as_classifier(candidate: Classifier | ClassifyFunction) -> Classifier:
    """Return `candidate` as a `Classifier`, wrapping bare callables.

    Raises:
        TypeError: If `candidate` is neither a classifier nor callable.
    """
    if isinstance(candidate, Classifier):
        return candidate
    if callable(candidate):
        return FunctionClassifier(candidate)
    raise TypeError(f"Expected a classifier or callable, got {type(candidate).__name__}")


ProfileInitializer = Callable[["Session"], None]


class ProfileRegistry:
    """Named classification profiles.

    A profile is an initializer that configures a session for one language:
    it sets the classifier, the iteration depth and any trigger keys.

    Examples:
        @profiles.register("scheme")
        def scheme_profile(session):
            session.classifier = ConstantClassifier(CaseStyle.NO_CONVERT)
            session.max_iteration = 1
    """

    def __init__(self):
        self._profiles: dict[str, ProfileInitializer] = {}

    def register(self, name: str) -> Callable[[ProfileInitializer], ProfileInitializer]:
        def decorator(initializer: ProfileInitializer) -> ProfileInitializer:
            self._profiles[name] = initializer
            return initializer

        return decorator

    def unregister(self, name: str) -> None:
        self._profiles.pop(name, None)

    def names(self) -> list[str]:
        return sorted(self._profiles)

    def get(self, name: str) -> ProfileInitializer:
        try:
            return self._profiles[name]
        except KeyError:
            raise UnknownProfileError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def activate(self, session: Session, name: str) -> None:
        """Run the profile's initializer against `session`."""
        self.get(name)(session)


profiles = ProfileRegistry()
