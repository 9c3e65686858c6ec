"""
Twisted STOMP client

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
from twisted.internet.protocol import Factory, Protocol

from stompmux.error import StompConnectionError, StompFrameError
from stompmux.protocol import StompParser

from .stream import StompObservable
from .util import endpointFactory, parseUri

LOG_CATEGORY = __name__

class StompLifecycleEvent(object):
    """A change of the state of the physical connection.

    :param type: One of :attr:`OPENED`, :attr:`CLOSED`, :attr:`ERROR`.
    :param exception: The exception which caused an :attr:`ERROR` event (if any).
    :param message: A human readable description (if any).
    """
    OPENED = 'OPENED'
    CLOSED = 'CLOSED'
    ERROR = 'ERROR'

    def __init__(self, type, exception=None, message=None):
        self.type = type
        self.exception = exception
        self.message = message

    def __repr__(self):
        return '%s(type=%r, exception=%r, message=%r)' % (self.__class__.__name__, self.type, self.exception, self.message)

class StompProtocol(Protocol):
    #
    # twisted.internet.Protocol interface overrides
    #
    def connectionMade(self):
        self._onConnectionMade(self)

    def connectionLost(self, reason):
        try:
            self._onConnectionLost(reason)
        finally:
            Protocol.connectionLost(self, reason)

    def dataReceived(self, data):
        self._parser.add(data)

        while self._parser.canRead():
            try:
                frame = self._parser.get()
            except StompFrameError as e:
                self.log.warning('Dropping malformed frame [%s]' % e)
                continue
            self.log.debug('Received %s' % frame.info())
            self._onFrame(frame)

    def __init__(self, onConnectionMade, onFrame, onConnectionLost):
        self._onConnectionMade = onConnectionMade
        self._onFrame = onFrame
        self._onConnectionLost = onConnectionLost

        # leave the used logger public in case the user wants to override it
        self.log = logging.getLogger(LOG_CATEGORY)

        self._parser = StompParser()

    #
    # user interface
    #
    def send(self, data):
        self.transport.write(data)

    def loseConnection(self):
        self.transport.loseConnection()

class StompFactory(Factory):
    protocol = StompProtocol

    def __init__(self, *args, **kwargs):
        self.args = args
        self.kwargs = kwargs

    def buildProtocol(self, _):
        protocol = self.protocol(*self.args, **self.kwargs)
        protocol.factory = self
        return protocol

class StompTransport(object):
    """The physical connection to a STOMP broker. It exposes the connection's lifecycle events and the frames it receives as :class:`~.stream.StompObservable` streams, and it sends wire-level data. It does not reconnect on its own.

    :param uri: The broker URI (see :func:`~.util.parseUri`).
    :param connectTimeout: The time (in seconds) to wait for the wire-level connection to be established. If :obj:`None`, we will wait indefinitely.
    """
    protocolFactory = StompFactory

    @classmethod
    def endpointFactory(cls, broker, timeout=None):
        return endpointFactory(broker, timeout)

    def __init__(self, uri, connectTimeout=None):
        self._broker = parseUri(uri)
        self._connectTimeout = connectTimeout
        self._protocol = None
        self._connecting = []
        self._disconnecting = []
        self._lifecycle = StompObservable('Lifecycle events of %(host)s:%(port)d' % self._broker)
        self._messages = StompObservable('Frames from %(host)s:%(port)d' % self._broker)
        self.log = logging.getLogger(LOG_CATEGORY)

    def lifecycle(self):
        """The stream of :class:`StompLifecycleEvent` objects."""
        return self._lifecycle

    def messages(self):
        """The stream of received :class:`~.protocol.frame.StompFrame` objects. Malformed frames are logged and dropped."""
        return self._messages

    @property
    def connected(self):
        return (self._protocol is not None) and (not self._disconnecting)

    def connect(self):
        """Open the connection. Returns a :class:`twisted.internet.defer.Deferred` which calls back with this transport when the connection is open (immediately, if it already is) and errs back with a :class:`~.error.StompConnectionError` if it could not be opened."""
        if self.connected:
            return defer.succeed(self)
        waiting = defer.Deferred()
        self._connecting.append(waiting)
        if len(self._connecting) == 1:
            if self._disconnecting:
                self.disconnect().addCallback(lambda _: self._open())
            else:
                self._open()
        return waiting

    def disconnect(self):
        """Close the connection (if open). Returns a :class:`twisted.internet.defer.Deferred` which calls back when the connection is closed."""
        if self._protocol is None:
            return defer.succeed(None)
        waiting = defer.Deferred()
        self._disconnecting.append(waiting)
        if len(self._disconnecting) == 1:
            self.log.info('Disconnecting from %(host)s:%(port)s ...' % self._broker)
            self._protocol.loseConnection()
        return waiting

    def send(self, data):
        """Write wire-level **data**. Returns a :class:`twisted.internet.defer.Deferred` which calls back when the data was handed to the network layer, or errs back with a :class:`~.error.StompConnectionError`."""
        if not self.connected:
            return defer.fail(StompConnectionError('Not connected'))
        try:
            self._protocol.send(data)
        except Exception as e:
            return defer.fail(StompConnectionError('Could not send to connection [%s]' % e))
        return defer.succeed(None)

    #
    # private helpers
    #
    def _open(self):
        endpoint = self.endpointFactory(self._broker, self._connectTimeout)
        self.log.info('Connecting to %(host)s:%(port)s ...' % self._broker)
        endpoint.connect(self.protocolFactory(self._onConnectionMade, self._messages.emit, self._onConnectionLost)).addCallbacks(self._onConnected, self._onConnectFailed)

    def _onConnectionMade(self, protocol):
        self._protocol = protocol
        self.log.info('Connection to %(host)s:%(port)s established' % self._broker)
        self._lifecycle.emit(StompLifecycleEvent(StompLifecycleEvent.OPENED))

    def _onConnectionLost(self, reason):
        self._protocol = None
        self.log.info('Disconnected: %s' % reason.getErrorMessage())
        self._lifecycle.emit(StompLifecycleEvent(StompLifecycleEvent.CLOSED, message=reason.getErrorMessage()))
        waiting, self._disconnecting = self._disconnecting, []
        for w in waiting:
            w.callback(None)

    def _onConnected(self, _):
        for waiting in self._release():
            waiting.callback(self)

    def _onConnectFailed(self, failure):
        error = StompConnectionError('Could not connect to %s:%d [%s]' % (self._broker['host'], self._broker['port'], failure.getErrorMessage()))
        self.log.warning(str(error))
        self._lifecycle.emit(StompLifecycleEvent(StompLifecycleEvent.ERROR, exception=error, message=failure.getErrorMessage()))
        for waiting in self._release():
            waiting.errback(error)

    def _release(self):
        waiting, self._connecting = self._connecting, []
        return waiting
