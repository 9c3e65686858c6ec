"""
"""
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
import collections

from stompmux.error import StompProtocolError

from . import commands
from .spec import StompSpec
from .subscriptions import StompSubscriptions

class StompSession(object):
    """This object implements an abstract representation of a STOMP protocol session: the connected flag, the registry of active subscriptions (see :class:`~.subscriptions.StompSubscriptions`), and the queue of sends issued before the broker's **CONNECTED** frame arrived. It does not do any I/O: every method reacts to one event (a call by the application, or a frame or lifecycle event of the transport) and returns the frames which are due to be sent. You can use it independently of the stompmux clients to roll your own STOMP client.

    :param login: The **login** header for **CONNECT** frames.
    :param passcode: The **passcode** header for **CONNECT** frames.
    :param host: The **host** header for **CONNECT** frames.
    :param ackMode: The default acknowledgment mode for **SUBSCRIBE** frames, or :obj:`None` (equivalent to :attr:`StompSpec.DEFAULT_ACK_MODE`).
    :param idFactory: See :class:`~.subscriptions.StompSubscriptions`.

    .. note :: The session state is not thread-safe. All calls have to come from one thread (in the Twisted client, the reactor thread).
    """
    CONNECTING = 'connecting'
    CONNECTED = 'connected'
    DISCONNECTED = 'disconnected'

    def __init__(self, login=None, passcode=None, host=None, ackMode=None, idFactory=None):
        self._login = login
        self._passcode = passcode
        self._host = host
        self._ackMode = ackMode or StompSpec.DEFAULT_ACK_MODE
        self._subscriptions = StompSubscriptions(idFactory)
        self._pending = collections.deque()
        self._reset()

    # connection lifecycle

    def connect(self, headers=None):
        """Create a *CONNECT* frame and set the session state to CONNECTING. Call this when the transport has been opened."""
        frame = commands.connect(headers, self._login, self._passcode, self._host)
        self._state = self.CONNECTING
        return frame

    def connected(self, frame):
        """Handle a *CONNECTED* frame and set the session state to CONNECTED. Returns the pending sends as a list of pairs (frame, context), oldest first, and clears the queue: the caller has to transmit them now, in this order.
        """
        self._version, self._id = commands.connected(frame)
        self._state = self.CONNECTED
        pending, self._pending = list(self._pending), collections.deque()
        return pending

    def disconnect(self, receipt=None):
        """Create a *DISCONNECT* frame if the session is connected (:obj:`None` otherwise) and set the session state to DISCONNECTED. Active subscriptions and pending sends are kept."""
        frame = commands.disconnect(receipt) if self.isConnected() else None
        self.close()
        return frame

    def close(self):
        """Set the session state to DISCONNECTED (the transport was closed). Active subscriptions and pending sends are kept."""
        self._reset()

    def isConnected(self):
        return self._state == self.CONNECTED

    # sending

    def send(self, frame, context=None):
        """Decide what to do with an outbound frame. Returns :obj:`True` if the frame may be transmitted right away. Otherwise, the pair (frame, context) is queued until the next *CONNECTED* frame, and :obj:`False` is returned.

        :param context: An arbitrary object which is handed back with the frame by :meth:`connected`.
        """
        if self.isConnected():
            return True
        self._pending.append((frame, context))
        return False

    def cancel(self, context):
        """Drop the pending sends associated with **context**. Returns :obj:`True` if there were any."""
        pending = collections.deque(p for p in self._pending if p[1] is not context)
        cancelled = len(pending) != len(self._pending)
        self._pending = pending
        return cancelled

    @property
    def pending(self):
        """The frames waiting for the next *CONNECTED* frame, oldest first."""
        return tuple(frame for (frame, _) in self._pending)

    # subscriptions

    def subscribe(self, destination, listener, headers=None):
        """Attach **listener** to **destination**. Returns a *SUBSCRIBE* frame if this is the destination's first listener, and :obj:`None` otherwise.

        :param listener: Any hashable object which you will get back from :meth:`listeners`.
        :param headers: Additional headers for the *SUBSCRIBE* frame (ignored for all but the first listener).

        Raises a :class:`~.error.StompProtocolError` if no *SUBSCRIBE* frame can be built for the first listener (no destination, or an invalid ack mode). The listener is not attached then.
        """
        subscription, created = self._subscriptions.add(destination, listener, commands.headerList(headers))
        if not created:
            return None
        try:
            return self._subscribe(subscription)
        except StompProtocolError:
            self._subscriptions.remove(destination, listener)
            raise

    def unsubscribe(self, destination, listener):
        """Detach **listener** from **destination**. Returns an *UNSUBSCRIBE* frame if this was the destination's last listener, and :obj:`None` otherwise (also if the listener was not attached at all)."""
        subscription = self._subscriptions.remove(destination, listener)
        if subscription is None:
            return None
        return commands.unsubscribe(subscription.id)

    def listeners(self, frame):
        """Return the listeners which an incoming frame has to be dispatched to: all listeners of the destination which exactly matches the frame's **destination** header (if any)."""
        destination = commands.destination(frame)
        if destination is None:
            return ()
        return self._subscriptions.listeners(destination)

    def replay(self):
        """Return a *SUBSCRIBE* frame for each active subscription (oldest first), carrying the subscription's original id. Use this after a reconnect if you wish the broker to know about the subscriptions again."""
        return [self._subscribe(subscription) for subscription in self._subscriptions]

    @property
    def subscriptions(self):
        """The registry of active subscriptions."""
        return self._subscriptions

    # session information

    @property
    def id(self):
        """The session id for the current client-broker connection."""
        return self._id

    @property
    def version(self):
        """The STOMP protocol version the broker chose for the current connection."""
        return self._version

    @property
    def state(self):
        """The current session state."""
        return self._state

    # helpers

    def _reset(self):
        self._id = None
        self._version = None
        self._state = self.DISCONNECTED

    def _subscribe(self, subscription):
        return commands.subscribe(subscription.destination, subscription.id, subscription.headers, self._ackMode)
