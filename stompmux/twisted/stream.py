"""
Copyright 2012 Mozes, Inc.

   Licensed under the Apache License, Version 2.0 (the "License");
   you may not use this file except in compliance with the License.
   You may obtain a copy of the License at

       http://www.apache.org/licenses/LICENSE-2.0

   Unless required by applicable law or agreed to in writing, software
   distributed under the License is distributed on an "AS IS" BASIS,
   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either expressed or implied.
   See the License for the specific language governing permissions and
   limitations under the License.
"""
import logging

from twisted.internet import defer

from stompmux.error import StompCancelledError

LOG_CATEGORY = __name__

class StompListener(object):
    """The handle of a listener attached to a :class:`StompObservable`. Call :meth:`cancel` to detach it."""
    def __init__(self, observable, callback, errback=None):
        self._observable = observable
        self.callback = callback
        self.errback = errback

    @property
    def active(self):
        return self in self._observable

    def cancel(self):
        self._observable.remove(self)

class StompObservable(object):
    """A hot stream of events: every event is pushed, in order, to the listeners attached at the time it occurs. A listener which raises is logged and does not keep the event from the other listeners.

    :param info: A description of the stream for log messages.
    """
    def __init__(self, info):
        self._info = info
        self._listeners = []
        self.log = logging.getLogger(LOG_CATEGORY)

    def __contains__(self, listener):
        return listener in self._listeners

    def __len__(self):
        return len(self._listeners)

    def listen(self, callback, errback=None):
        """Attach a listener. **callback** is called with each event, **errback** (if any) with each error passed to :meth:`fail`. Returns a :class:`StompListener`."""
        listener = StompListener(self, callback, errback)
        self._listeners.append(listener)
        return listener

    def remove(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event):
        for listener in list(self._listeners):
            self._call(listener.callback, event)

    def fail(self, error):
        for listener in list(self._listeners):
            if listener.errback:
                self._call(listener.errback, error)

    def _call(self, f, arg):
        try:
            f(arg)
        except Exception:
            self.log.exception('%s: listener %r failed' % (self._info, f))

class _Failed(object):
    def __init__(self, error):
        self.error = error

class StompTopic(object):
    """A cancellable, lazy, and unbounded sequence of frames received for one destination. Consume it by calling :meth:`get`, or by iterating over it (each item is a :class:`twisted.internet.defer.Deferred` for the next frame)::

        @defer.inlineCallbacks
        def consume(client):
            topic = client.topic('/queue/test')
            for frame in topic:
                frame = yield frame
                ...

    If a **handler** is given, frames are pushed to it instead of being queued, and errors go to **errback** (if any).

    :param destination: The destination this topic listens to.
    :param onCancel: A callable which is called with this topic when it is cancelled for the first time.
    :param handler: A callable :obj:`f(frame)`, or :obj:`None`.
    :param errback: A callable :obj:`f(error)` which receives the errors of a topic with a **handler**, or :obj:`None`.
    """
    def __init__(self, destination, onCancel, handler=None, errback=None):
        self.destination = destination
        self._onCancel = onCancel
        self._handler = handler
        self._queue = defer.DeferredQueue()
        self._errback = errback
        self._waiting = []
        self._cancelled = False

    def __iter__(self):
        while True:
            yield self.get()

    def get(self):
        """Return a :class:`twisted.internet.defer.Deferred` which calls back with the next frame. It errs back with a :class:`~.error.StompProtocolError` if the broker sent an **ERROR** frame for this destination, and with a :class:`~.error.StompCancelledError` if the topic was cancelled and there are no more queued frames."""
        if self._cancelled and not self._queue.pending:
            return defer.fail(StompCancelledError('Topic cancelled: %s' % self.destination))
        waiting = self._queue.get()
        if not waiting.called:
            self._waiting.append(waiting)
            waiting.addBoth(self._forget, waiting)
        return waiting.addCallbacks(self._unwrap, self._onCancelled)

    def cancel(self):
        """Stop listening. The first call detaches the topic from the client (which sends an **UNSUBSCRIBE** frame when this was the destination's last listener); subsequent calls are no-ops. Pending :meth:`get` calls err back with a :class:`~.error.StompCancelledError`."""
        if self._cancelled:
            return
        self._cancelled = True
        self._onCancel(self)
        waiting, self._waiting = self._waiting, []
        for d in waiting:
            d.cancel()

    @property
    def cancelled(self):
        return self._cancelled

    def deliver(self, frame):
        if self._handler is not None:
            self._handler(frame)
        else:
            self._queue.put(frame)

    def fail(self, error):
        """Pass **error** on to the consumer. Returns :obj:`False` if there is nobody to take it (a topic with a **handler** but no **errback**)."""
        if self._handler is None:
            self._queue.put(_Failed(error))
        elif self._errback is not None:
            self._errback(error)
        else:
            return False
        return True

    def __repr__(self):
        return '%s(destination=%r, cancelled=%r)' % (self.__class__.__name__, self.destination, self._cancelled)

    def _unwrap(self, result):
        if isinstance(result, _Failed):
            raise result.error
        return result

    def _onCancelled(self, failure):
        if self._cancelled:
            failure.trap(defer.CancelledError)
            raise StompCancelledError('Topic cancelled: %s' % self.destination)
        return failure

    def _forget(self, result, waiting):
        if waiting in self._waiting:
            self._waiting.remove(waiting)
        return result
