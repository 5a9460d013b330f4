"""Snapshot holders with change notification.

An ``Observable`` owns exactly one immutable value. Writers publish a whole
new value; subscribers are called with the new snapshot after every publish.
"""

import logging

logger = logging.getLogger(__name__)


class Subscription:
    def __init__(self, observable, callback):
        self._observable = observable
        self._callback = callback

    def unsubscribe(self):
        self._observable._remove(self._callback)


class Observable:
    def __init__(self, value):
        self._value = value
        self._callbacks = []

    @property
    def value(self):
        return self._value

    def publish(self, value):
        self._value = value
        for callback in list(self._callbacks):
            callback(value)
        return value

    def subscribe(self, callback):
        """Register ``callback`` and immediately deliver the current value."""
        self._callbacks.append(callback)
        callback(self._value)
        return Subscription(self, callback)

    def _remove(self, callback):
        if callback in self._callbacks:
            self._callbacks.remove(callback)
        else:
            logger.debug("unsubscribe of unknown callback ignored")
