"""The client is based on `Twisted <http://twistedmatrix.com/>`_, a very mature and powerful asynchronous programming framework. It keeps one connection to the broker, multiplexes any number of topic listeners over it (one *SUBSCRIBE* frame per destination, however many listeners), and accepts sends at any time: frames sent before the broker's *CONNECTED* frame arrived are queued and flushed in order as soon as it does.

.. seealso:: `STOMP protocol specification <http://stomp.github.com/>`_, `Twisted API documentation <http://twistedmatrix.com/documents/current/api/>`_

Examples
--------

Producer
^^^^^^^^

.. literalinclude:: ../../stompmux/examples/twisted/producer.py

Consumer
^^^^^^^^

.. literalinclude:: ../../stompmux/examples/twisted/consumer.py

API
---
"""
"""
Twisted STOMP client

Copyright 2011, 2012 Mozes, Inc.

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

from stompmux.error import StompCancelledError, StompConnectionError, StompFrameError
from stompmux.protocol import StompSession, StompSpec, commands, parse

from .protocol import StompLifecycleEvent, StompTransport
from .stream import StompObservable, StompTopic

LOG_CATEGORY = __name__

class Stomp(object):
    """An asynchronous STOMP client for the Twisted framework.

    :param config: A :class:`~.config.StompConfig` object.
    :param transport: The physical connection, or :obj:`None` (a :class:`~.protocol.StompTransport` for the config's **uri**). Any object with the same interface will do.

    .. note :: All methods must be called from the reactor thread. Use :meth:`twisted.internet.interfaces.IReactorThreads.callFromThread` if you wish to drive the client from another thread.
    """
    def __init__(self, config, transport=None):
        self._config = config
        self.session = StompSession(config.login, config.passcode, config.host, config.ackMode)
        self._transport = transport or StompTransport(config.uri, config.connectTimeout)

        self.log = logging.getLogger(LOG_CATEGORY)

        self._lifecycle = StompObservable('STOMP lifecycle')
        self._transport.lifecycle().listen(self._lifecycle.emit)

        # listeners which only live between connect and disconnect
        self._lifecycleListener = None
        self._framesListener = None

        self._connectHeaders = None
        self._connecting = []

    def lifecycle(self):
        """The stream of :class:`~.protocol.StompLifecycleEvent` objects of the transport. **ERROR** frames which cannot be routed to a topic are emitted here, too (as events of type **ERROR** carrying a :class:`~.error.StompProtocolError`)."""
        return self._lifecycle

    def isConnected(self):
        """Whether the broker's *CONNECTED* frame has arrived on the current connection. This is a snapshot: the connection may be gone by the time you act on it."""
        return self.session.isConnected()

    #
    # STOMP commands
    #
    def connect(self, headers=None, forceReconnect=False):
        """Establish a STOMP session: open the transport (if necessary), send a *CONNECT* frame as soon as it is open, and flush the pending sends when the *CONNECTED* frame arrives. This method returns a :class:`twisted.internet.defer.Deferred` which calls back with :obj:`self` when the STOMP session is established. It errs back with a :class:`~.error.StompConnectionError` if the transport could not be opened or was closed in between, with a :class:`~.error.StompProtocolError` if the broker answered with an *ERROR* frame, and with a :class:`~.error.StompCancelledError` if :meth:`disconnect` was called in between.

        :param headers: Additional headers for the *CONNECT* frame (on top of the config's **headers**).
        :param forceReconnect: Call :meth:`disconnect` first. Otherwise, if we are already connected, this is a no-op.

        .. note :: If a connect attempt is already pending, the returned :class:`twisted.internet.defer.Deferred` fires with the outcome of that attempt, and **headers** are ignored.
        """
        if forceReconnect:
            self.disconnect()
        if self.isConnected():
            return defer.succeed(self)

        waiting = defer.Deferred()
        self._connecting.append(waiting)
        if len(self._connecting) > 1:
            return waiting

        self._connectHeaders = commands.headerList(self._config.headers) + commands.headerList(headers)
        self._unlisten()
        self._lifecycleListener = self._transport.lifecycle().listen(self._onLifecycle)
        self._framesListener = self._transport.messages().listen(self._onFrame)
        if self._transport.connected:
            self._onOpened()
        else:
            self._transport.connect().addErrback(self._onConnectFailed)
        return waiting

    def disconnect(self, receipt=None):
        """Stop dispatching incoming frames, send a *DISCONNECT* frame (if the STOMP session is established), and close the transport. Active topics and pending sends are kept: topics keep their listeners (see :meth:`resubscribe`) and pending sends will be flushed upon the next successful :meth:`connect`.

        :param receipt: Add a **receipt** header with this id to the *DISCONNECT* frame.
        """
        self._unlisten()
        frame = self.session.disconnect(receipt)
        if frame is not None:
            self._transmit(frame).addErrback(self._onSendFailed, frame)
        self._release(error=StompCancelledError('Disconnected before the STOMP session was established'))
        self.log.info('Disconnecting ...')
        return self._transport.disconnect()

    def send(self, destination, body=None, headers=None, receipt=None):
        """Send a *SEND* frame. See :meth:`sendFrame`."""
        return self.sendFrame(commands.send(destination, body, headers, receipt))

    def sendFrame(self, frame):
        """Send a STOMP frame. If the STOMP session is established, the frame is transmitted right away. Otherwise, it is queued and transmitted (in order, oldest first) when the next *CONNECTED* frame arrives. Frames are never dropped silently.

        This method returns a :class:`twisted.internet.defer.Deferred` which calls back when the frame was handed to the transport, or errs back with the transport's error. Cancel it to remove a frame from the queue before it was transmitted.
        """
        waiting = defer.Deferred(self._cancel)
        if self.session.send(frame, waiting):
            return self._transmit(frame)
        self.log.debug('Queueing %s (not connected)' % frame.info())
        return waiting

    def topic(self, destination, headers=None, handler=None, errback=None):
        """Listen to a destination. The first listener of a destination causes a *SUBSCRIBE* frame (subsequent listeners share its subscription); when the last listener of a destination is cancelled, an *UNSUBSCRIBE* frame is sent. Returns a :class:`~.stream.StompTopic`.

        :param headers: Additional headers for the *SUBSCRIBE* frame (only used by the first listener of the destination). An **ack** header overrides the config's **ackMode**.
        :param handler: A callable :obj:`f(frame)` which receives the frames (instead of queueing them in the topic).
        :param errback: A callable :obj:`f(error)` which receives the :class:`~.error.StompProtocolError` of an *ERROR* frame for this destination (only used together with **handler**). Without it, such errors of a handler topic are logged and passed on to :meth:`lifecycle`.

        .. note :: Frames are delivered as soon as they arrive. Whether the broker has acknowledged the subscription is not tracked.
        """
        topic = StompTopic(destination, self._onTopicCancelled, handler, errback)
        frame = self.session.subscribe(destination, topic, headers)
        if frame is not None:
            self.log.info('Subscribing to %s [id=%s]' % (destination, frame.header(StompSpec.ID_HEADER)))
            self.sendFrame(frame).addErrback(self._onSendFailed, frame)
        return topic

    def resubscribe(self):
        """Send a *SUBSCRIBE* frame for each active destination, carrying its original subscription id. The client does not do this on its own: call it after reconnecting if the broker is supposed to know the subscriptions again. Returns a :class:`twisted.internet.defer.Deferred` which calls back when all frames were handed to the transport.
        """
        sent = []
        for frame in self.session.replay():
            self.log.info('Replaying subscription: %s' % frame.info())
            sent.append(self.sendFrame(frame))
        return defer.gatherResults(sent, consumeErrors=True)

    def dispatch(self, frame):
        """Forward an incoming frame to the topics listening to its destination (the one which exactly matches its **destination** header). Frames without such a destination are dropped. An *ERROR* frame is passed on to the topics as a :class:`~.error.StompProtocolError`, or to :meth:`lifecycle` if it cannot be routed or no topic takes it.
        """
        listeners = self.session.listeners(frame)
        if frame.command == StompSpec.ERROR:
            error = commands.error(frame)
            self._release(error=error)
            taken = False
            for listener in listeners:
                try:
                    taken = listener.fail(error) or taken
                except Exception:
                    self.log.exception('Error handler for %s failed' % frame.info())
                    taken = True
            if not taken:
                self.log.error(str(error))
                self._lifecycle.emit(StompLifecycleEvent(StompLifecycleEvent.ERROR, exception=error, message=frame.header(StompSpec.MESSAGE_HEADER)))
            return
        if (not listeners) and (frame.command == StompSpec.MESSAGE):
            self.log.debug('Ignoring message (no listener): %s' % frame.info())
        for listener in listeners:
            try:
                listener.deliver(frame)
            except Exception:
                self.log.exception('Handler for %s failed' % frame.info())

    #
    # callbacks for transport events
    #
    def _onLifecycle(self, event):
        if event.type == StompLifecycleEvent.OPENED:
            self._onOpened()
        elif event.type == StompLifecycleEvent.CLOSED:
            if self.session.state == self.session.CONNECTING:
                self._release(error=StompConnectionError('Connection lost before the STOMP session was established'))
            self.session.close()
        elif event.type == StompLifecycleEvent.ERROR:
            self.log.error('Transport error: %s' % (event.exception or event.message))

    def _onOpened(self):
        frame = self.session.connect(self._connectHeaders)
        self._transmit(frame).addErrback(self._onConnectFailed)

    def _onFrame(self, frame):
        if isinstance(frame, bytes):
            try:
                frame = parse(frame)
            except StompFrameError as e:
                self.log.warning('Dropping malformed frame [%s]' % e)
                return
        if frame.command == StompSpec.CONNECTED:
            self._onConnected(frame)
        self.dispatch(frame)

    def _onConnected(self, frame):
        pending = self.session.connected(frame)
        self.log.info('Connected to stomp broker [session=%s, version=%s]' % (self.session.id, self.session.version))
        if pending:
            self.log.info('Flushing %d pending frame(s)' % len(pending))
        # everything goes on the wire before any caller is notified
        sent = [(self._transmit(frame_), waiting) for (frame_, waiting) in pending]
        for (result, waiting) in sent:
            result.chainDeferred(waiting)
        self._release(result=self)

    def _onConnectFailed(self, failure):
        self.log.error('Could not establish STOMP session [%s]' % failure.getErrorMessage())
        self._release(error=failure.value)

    def _onTopicCancelled(self, topic):
        frame = self.session.unsubscribe(topic.destination, topic)
        if frame is not None:
            self.log.info('Unsubscribing from %s [id=%s]' % (topic.destination, frame.header(StompSpec.ID_HEADER)))
            self.sendFrame(frame).addErrback(self._onSendFailed, frame)

    def _onSendFailed(self, failure, frame):
        self.log.error('Could not send %s [%s]' % (frame.info(), failure.getErrorMessage()))

    #
    # private helpers
    #
    def _cancel(self, waiting):
        if self.session.cancel(waiting):
            self.log.debug('Pending send cancelled')

    def _release(self, result=None, error=None):
        waiting, self._connecting = self._connecting, []
        for w in waiting:
            if error is None:
                w.callback(result)
            else:
                w.errback(error)

    def _transmit(self, frame):
        self.log.debug('Sending %s' % frame.info())
        return self._transport.send(bytes(frame))

    def _unlisten(self):
        for listener in (self._lifecycleListener, self._framesListener):
            if listener is not None:
                listener.cancel()
        self._lifecycleListener = self._framesListener = None
