#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#
"""
Various helper functions that are used across the library.
"""
import asyncio


def ensure_future(coro, loop=None):
    """
    Wrapper for asyncio.ensure_future which dumps exceptions
    """
    if loop is None:
        loop = asyncio.get_running_loop()
    fut = asyncio.ensure_future(coro, loop=loop)

    def exception_logging_done_cb(fut):
        try:
            e = fut.exception()
        except asyncio.CancelledError:
            return
        if e is not None:
            loop.call_exception_handler(
                {
                    "message": "Unhandled exception in async future",
                    "future": fut,
                    "exception": e,
                }
            )

    fut.add_done_callback(exception_logging_done_cb)
    return fut


class Signal:
    """
    A simple signalling construct.

    Listeners may connect() to this signal, and their handlers will
    be invoked when fire() is called.
    """

    def __init__(self):
        self._handlers = []

    def connect(self, handler):
        """
        Connect a handler to this signal

        :param handler: Function to invoke when the signal fires
        :return: the handler, for use with disconnect()
        """
        if handler not in self._handlers:
            self._handlers.append(handler)
        return handler

    def disconnect(self, handler):
        """
        Disconnect a previously connected handler

        :param handler: The handler to remove
        """
        if handler in self._handlers:
            self._handlers.remove(handler)

    def fire(self, *args, **kwargs):
        """
        Fire the signal, invoking all connected handlers

        :params args: Arguments to call handlers with
        """
        for handler in list(self._handlers):
            handler(*args, **kwargs)

    def __len__(self):
        return len(self._handlers)
