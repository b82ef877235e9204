"""Change notification for gradebook objects."""

import dataclasses
import typing


@dataclasses.dataclass(frozen=True)
class ChangeEvent:
    """Describes a structural change to a course or student.

    Attributes
    ----------
    name : str
        A tag naming the change, such as ``"student_enrolled"``.
    old_value
        The value before the change, or `None`.
    new_value
        The value after the change, or `None`.
    source
        The object that emitted the event.

    """

    name: str
    old_value: typing.Any = None
    new_value: typing.Any = None
    source: typing.Any = None


Listener = typing.Callable[[ChangeEvent], None]


class Observable:
    """Mixin that keeps a list of listeners and notifies them of changes.

    Listeners are plain callables accepting a single :class:`ChangeEvent`.
    They are called synchronously, in the order they were added.

    """

    def __init__(self):
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener):
        """Register a callable to be notified of changes."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        """Stop notifying a listener. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, name, old_value=None, new_value=None):
        event = ChangeEvent(name, old_value, new_value, source=self)
        for listener in list(self._listeners):
            listener(event)
