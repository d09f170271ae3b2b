"""Per-buffer session wiring the engine components to one host."""

from __future__ import annotations

from collections.abc import Callable, Hashable

from .classifier import Classifier, ClassifyFunction, ProfileRegistry, as_classifier, profiles
from .config import CaseConfig, ConfigError, ConfigScope
from .driver import ConversionDriver
from .host import Host
from .models import Conversion, EditEvent, EditKind
from .mutator import Mutator
from .preview import PendingMarks, PreviewMarkerManager


class Session:
    """electric-case state for one buffer.

    Owns the two slots profiles configure, `classifier` and `max_iteration`,
    and resolves the scan switches through a `ConfigScope` so a session can
    override the global defaults without affecting other buffers.

    Args:
        host: Editing surface for the buffer.
        classifier: Classifier or plain ``(start, end, lookback)`` callable.
        scope: Configuration scope shared between sessions; a private one is
            created when omitted.
        key: Key identifying this session's overrides in `scope`.
        max_iteration: Iteration depth; defaults to the resolved configuration.
        warn: Optional callback for non-fatal problems.

    Examples:
        buffer = TextBuffer()
        session = Session(buffer, classifier=ConstantClassifier(CaseStyle.SNAKE))
        session.enable()
        buffer.type("foo-bar ")
        buffer.text  # "foo_bar "
    """

    def __init__(
        self,
        host: Host,
        classifier: Classifier | ClassifyFunction | None = None,
        scope: ConfigScope | None = None,
        key: Hashable | None = None,
        max_iteration: int | None = None,
        warn: Callable[[str], None] | None = None,
    ):
        self.host = host
        self.scope = scope or ConfigScope()
        self.key = key if key is not None else object()
        self._trigger_keys: list[str] = []
        self._classifier: Classifier | None = None
        if classifier is not None:
            self.classifier = classifier
        self._max_iteration: int | None = None
        if max_iteration is not None:
            self.max_iteration = max_iteration
        self.warn = warn

        self.marks = PendingMarks(host)
        self.mutator = Mutator(host, self.marks)
        self.driver = ConversionDriver(
            host,
            self.mutator,
            classifier_source=lambda: self._classifier,
            config_source=self.effective_config,
            depth_source=lambda: self.max_iteration,
            warn=self._warn,
        )
        self.preview = PreviewMarkerManager(
            host,
            self.marks,
            config_source=self.effective_config,
            depth_source=lambda: self.max_iteration,
        )
        self._unsubscribe = host.subscribe_edit_events(self.on_edit)

    # Slots

    @property
    def classifier(self) -> Classifier | None:
        return self._classifier

    @classifier.setter
    def classifier(self, candidate: Classifier | ClassifyFunction | None) -> None:
        self._classifier = None if candidate is None else as_classifier(candidate)

    @property
    def max_iteration(self) -> int:
        if self._max_iteration is None:
            return self.effective_config().max_iteration
        return self._max_iteration

    @max_iteration.setter
    def max_iteration(self, depth: int) -> None:
        if isinstance(depth, bool) or not isinstance(depth, int) or depth <= 0:
            raise ConfigError("`max_iteration` must be a positive integer")
        self._max_iteration = depth

    # Configuration

    def effective_config(self) -> CaseConfig:
        return self.scope.resolve(self.key)

    def configure(self, **changes: object) -> CaseConfig:
        """Override configuration for this session only."""
        return self.scope.set_local(self.key, **changes)

    def use_profile(self, name: str, registry: ProfileRegistry | None = None) -> None:
        (registry or profiles).activate(self, name)

    # Mode

    @property
    def enabled(self) -> bool:
        return self.driver.enabled

    def enable(self) -> None:
        self.driver.enable()

    def disable(self) -> None:
        self.driver.disable()
        self.preview.clear()

    def toggle(self) -> bool:
        self.driver.toggle()
        if not self.enabled:
            self.preview.clear()
        return self.enabled

    def bind_trigger(self, key: str, delimiter: str | None = None) -> None:
        """Run a synthetic-delimiter pass whenever `key` is pressed."""
        self.host.bind_key_to_trigger(key, lambda: self.driver.trigger(delimiter))
        if key not in self._trigger_keys:
            self._trigger_keys.append(key)

    def close(self) -> None:
        """Detach from the host and drop this session's overrides.

        The driver is disabled and every trigger key bound through
        `bind_trigger` is released, so the host no longer reaches the engine.
        """
        self._unsubscribe()
        self.driver.disable()
        for key in self._trigger_keys:
            self.host.unbind_key(key)
        self._trigger_keys.clear()
        self.preview.clear()
        self.scope.clear_local(self.key)

    # Events

    def on_edit(self, event: EditEvent) -> list[Conversion]:
        """Handle one host edit notification.

        Engine edits are ignored. Plain character insertions refresh the
        preview marks and run a conversion pass; any other change clears the
        marks.
        """
        if self.mutator.is_suppressing or not self.enabled:
            return []
        if event.kind is not EditKind.SELF_INSERT:
            self.preview.clear()
            return []

        conversions = self.driver.handle_edit(event)
        self.preview.refresh(event)
        return conversions

    def _warn(self, message: str) -> None:
        if self.warn is not None:
            self.warn(message)
