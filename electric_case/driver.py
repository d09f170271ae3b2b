"""Conversion driver: re-evaluates the tokens just behind the cursor."""

from __future__ import annotations

from collections.abc import Callable

from .classifier import Classifier
from .config import CaseConfig
from .converter import convert
from .exceptions import ClassificationError
from .host import Host
from .models import CaseStyle, Conversion, DriverState, EditEvent, EditKind, Token
from .mutator import Mutator
from .scanner import is_token_char, read_window


class ConversionDriver:
    """Convert the last few tokens before the cursor on every edit.

    Each pass walks depths K down to 1, K being the session's iteration
    depth, and handles the token at lookback ``depth - 1``, so the farthest
    token is converted first and the token just completed is converted last.
    Offsets are re-derived from the cursor at every depth, which keeps later
    depths correct after earlier rewrites changed the buffer length.

    A failure while classifying or converting one token is reported through
    `warn` and does not stop the other depths.

    Args:
        host: Editing surface holding the buffer.
        mutator: Applies rewrites to the host.
        classifier_source: Returns the session's current classifier.
        config_source: Returns the session's effective configuration.
        depth_source: Returns the session's current iteration depth.
        warn: Optional callback for non-fatal problems.
    """

    def __init__(
        self,
        host: Host,
        mutator: Mutator,
        classifier_source: Callable[[], Classifier | None],
        config_source: Callable[[], CaseConfig],
        depth_source: Callable[[], int],
        warn: Callable[[str], None] | None = None,
    ):
        self.host = host
        self.mutator = mutator
        self._classifier_source = classifier_source
        self._config_source = config_source
        self._depth_source = depth_source
        self.warn = warn
        self.state = DriverState.DISABLED
        self._running = False

    @property
    def enabled(self) -> bool:
        return self.state is DriverState.ENABLED

    def enable(self) -> None:
        self.state = DriverState.ENABLED

    def disable(self) -> None:
        self.state = DriverState.DISABLED

    def toggle(self) -> DriverState:
        self.state = DriverState.DISABLED if self.enabled else DriverState.ENABLED
        return self.state

    def at_token_boundary(self, config: CaseConfig) -> bool:
        """Return True when the character before the cursor ends a token.

        The cursor is mid-token when that character still belongs to the
        token alphabet, or when there is no character before it at all.
        """
        cursor = self.host.cursor
        if cursor == 0:
            return False
        return not is_token_char(self.host.get_text(cursor - 1, cursor), config)

    def handle_edit(self, event: EditEvent) -> list[Conversion]:
        """Run a conversion pass if `event` qualifies.

        Only plain character insertions qualify, and only while the driver is
        enabled, no selection is active, and the cursor sits at a token
        boundary.

        Returns:
            list[Conversion]: Rewrites applied by the pass, if any.
        """
        if not self.enabled or event.kind is not EditKind.SELF_INSERT:
            return []
        if self.host.has_active_selection:
            return []
        if not self.at_token_boundary(self._config_source()):
            return []
        return self.convert_all()

    def convert_all(self) -> list[Conversion]:
        """Run one pass over depths K..1 and return the applied rewrites.

        A pass requested while another pass is running is dropped.

        Examples:
            driver.convert_all()  # [Conversion(token=Token(0, 8, "a-symbol"), ...), ...]
        """
        conversions: list[Conversion] = []
        self._run_pass(conversions)
        return conversions

    def _run_pass(self, conversions: list[Conversion]) -> None:
        if self._running:
            self._warn("Dropped a conversion pass requested during another pass")
            return

        self._running = True
        try:
            self._convert_all(conversions)
        finally:
            self._running = False

    def _convert_all(self, conversions: list[Conversion]) -> None:
        classifier = self._classifier_source()
        if classifier is None:
            return

        config = self._config_source()
        for depth in range(self._depth_source(), 0, -1):
            lookback = depth - 1
            window = read_window(self.host, self.host.cursor, config)
            token = window.scan(lookback, config)
            if token is None:
                continue
            try:
                conversion = self._convert_token(classifier, token, lookback)
            except ClassificationError as error:
                self._warn(str(error))
                continue
            if conversion is not None:
                conversions.append(conversion)

    def _convert_token(
        self, classifier: Classifier, token: Token, lookback: int
    ) -> Conversion | None:
        try:
            style = classifier.classify(token.start, token.end, lookback)
            if not isinstance(style, CaseStyle):
                raise TypeError(f"classifier returned {style!r}, expected a CaseStyle")
            replacement = convert(token.text, style)
        except ClassificationError as error:
            if error.lookback is not None:
                raise
            raise type(error)(token.start, token.end, lookback, reason=error.reason) from error
        except Exception as error:
            raise ClassificationError(
                token.start, token.end, lookback, reason=str(error) or type(error).__name__
            ) from error

        # The classifier may have read the buffer; make sure the token is intact
        if self.host.get_text(token.start, token.end) != token.text:
            raise ClassificationError(
                token.start, token.end, lookback, reason="token changed during classification"
            )

        if not self.mutator.apply(token.start, token.end, replacement):
            return None
        return Conversion(token, style, replacement, lookback)

    def trigger(self, delimiter: str | None = None) -> list[Conversion]:
        """Insert a synthetic delimiter, run a pass, then remove the delimiter.

        Lets the classifier see the context of a completed statement (for
        example a declaration followed by ``;``) before the real key is
        handled. Runs only while the driver is enabled. The delimiter is
        located by following its offset through the pass's rewrites, not by
        the cursor, and is removed even when the pass raises. If something
        else has replaced it, it is left in place and a warning is emitted.

        Args:
            delimiter: Character to insert; defaults to the configured one.

        Returns:
            list[Conversion]: Rewrites applied by the pass.
        """
        if not self.enabled or self.host.has_active_selection:
            return []

        delimiter = delimiter or self._config_source().delimiter
        offset = self.host.cursor
        with self.mutator.suppressing():
            self.host.insert_text(offset, delimiter)
            self.host.cursor = offset + len(delimiter)
        conversions: list[Conversion] = []
        try:
            self._run_pass(conversions)
            return conversions
        finally:
            self._remove_delimiter(delimiter, track_offset(offset, conversions))

    def _remove_delimiter(self, delimiter: str, start: int) -> None:
        end = start + len(delimiter)
        if start < 0 or end > self.host.length or self.host.get_text(start, end) != delimiter:
            self._warn(f"Synthetic delimiter {delimiter!r} was moved; left in place")
            return

        cursor = self.host.cursor
        with self.mutator.suppressing():
            self.host.delete_range(start, end)
            if cursor >= end:
                self.host.cursor = cursor - len(delimiter)
            elif cursor > start:
                self.host.cursor = start
            else:
                self.host.cursor = cursor

    def _warn(self, message: str) -> None:
        if self.warn is not None:
            self.warn(message)


def track_offset(offset: int, conversions: list[Conversion]) -> int:
    """Follow `offset` through rewrites applied in order before it.

    Examples:
        track_offset(7, [Conversion(Token(0, 7, "foo-bar"), CaseStyle.CAMEL, "fooBar", 0)])  # 6
    """
    for conversion in conversions:
        if conversion.token.end <= offset:
            offset += len(conversion.replacement) - len(conversion.token)
    return offset
