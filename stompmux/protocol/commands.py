"""This module implements a low-level and stateless API for the STOMP commands the session layer needs. All STOMP command frames are represented as :class:`~.frame.StompFrame` objects. It forms the basis for :class:`~.session.StompSession` which represents the full state of an abstract STOMP protocol session. You can use the commands API independently of other stompmux modules to roll your own STOMP related functionality.

Examples:

>>> from stompmux.protocol import commands
>>> commands.connect([('login', 'guest')])
StompFrame(command='CONNECT', headers=(('accept-version', '1.1,1.0'), ('login', 'guest')), body=None)
>>> commands.subscribe('/queue/test', '4711')
StompFrame(command='SUBSCRIBE', headers=(('id', '4711'), ('destination', '/queue/test'), ('ack', 'auto')), body=None)
>>> commands.unsubscribe('4711')
StompFrame(command='UNSUBSCRIBE', headers=(('id', '4711'),), body=None)

.. seealso :: Specification of STOMP protocols `1.0 <http://stomp.github.com//stomp-specification-1.0.html>`_ and `1.1 <http://stomp.github.com//stomp-specification-1.1.html>`_, your favorite broker's documentation for additional STOMP headers.
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
from stompmux.error import StompProtocolError

from .frame import StompFrame
from .spec import StompSpec

# outgoing frames

def connect(headers=None, login=None, passcode=None, host=None):
    """Create a **CONNECT** frame. The **accept-version** header always comes first, and offers the broker STOMP 1.1 and 1.0.

    :param headers: Additional STOMP headers (an iterable of pairs or a :obj:`dict`).
    :param login: The **login** header.
    :param passcode: The **passcode** header.
    :param host: The **host** header which names the virtual host on the broker side.
    """
    headers_ = [(StompSpec.ACCEPT_VERSION_HEADER, StompSpec.ACCEPT_VERSIONS)]
    for (name, value) in ((StompSpec.HOST_HEADER, host), (StompSpec.LOGIN_HEADER, login), (StompSpec.PASSCODE_HEADER, passcode)):
        if value is not None:
            headers_.append((name, value))
    headers_.extend(headerList(headers))
    return StompFrame(StompSpec.CONNECT, headers_)

def disconnect(receipt=None):
    """Create a **DISCONNECT** frame.

    :param receipt: Add a **receipt** header with this id to request a **RECEIPT** frame from the broker. If :obj:`None`, no such header is added.
    """
    return StompFrame(StompSpec.DISCONNECT, _receiptHeader(receipt))

def send(destination, body=None, headers=None, receipt=None):
    """Create a **SEND** frame.

    :param destination: Destination for the frame.
    :param body: Message body (:obj:`bytes`, text, or :obj:`None`). If the body contains a frame delimiter, a **content-length** header is added unless you supplied one.
    :param headers: Additional STOMP headers.
    :param receipt: See :func:`disconnect`.
    """
    if not destination:
        raise StompProtocolError('Cannot send (destination is missing)')
    headers = [(StompSpec.DESTINATION_HEADER, destination)] + headerList(headers) + _receiptHeader(receipt)
    frame = StompFrame(StompSpec.SEND, headers, body)
    if (frame.body is not None) and (StompSpec.FRAME_DELIMITER in frame.body) and (frame.header(StompSpec.CONTENT_LENGTH_HEADER) is None):
        frame = frame.replace(headers=frame.headers + ((StompSpec.CONTENT_LENGTH_HEADER, str(len(frame.body))),))
    return frame

def subscribe(destination, id_, headers=None, ack=None):
    """Create a **SUBSCRIBE** frame. The headers are ordered **id**, **destination**, **ack**, then the additional headers.

    :param destination: Destination for the subscription.
    :param id_: The subscription id which correlates **MESSAGE** frames and the eventual **UNSUBSCRIBE** frame to this subscription.
    :param headers: Additional STOMP headers. An **ack** header in here overrides **ack**.
    :param ack: The acknowledgment mode, or :obj:`None` (equivalent to :attr:`StompSpec.DEFAULT_ACK_MODE`).
    """
    if not destination:
        raise StompProtocolError('Cannot subscribe (destination is missing)')
    headers = headerList(headers)
    for (name, value) in headers:
        if name == StompSpec.ACK_HEADER:
            ack = value
            break
    ack = ack or StompSpec.DEFAULT_ACK_MODE
    if ack not in StompSpec.ACK_MODES:
        raise StompProtocolError('Invalid ack mode: %s' % ack)
    headers = [(name, value) for (name, value) in headers if name not in (StompSpec.ID_HEADER, StompSpec.DESTINATION_HEADER, StompSpec.ACK_HEADER)]
    return StompFrame(StompSpec.SUBSCRIBE, [(StompSpec.ID_HEADER, id_), (StompSpec.DESTINATION_HEADER, destination), (StompSpec.ACK_HEADER, ack)] + headers)

def unsubscribe(id_, receipt=None):
    """Create an **UNSUBSCRIBE** frame.

    :param id_: The id of the subscription in question (see :func:`subscribe`).
    :param receipt: See :func:`disconnect`.
    """
    return StompFrame(StompSpec.UNSUBSCRIBE, [(StompSpec.ID_HEADER, id_)] + _receiptHeader(receipt))

# incoming frames

def destination(frame):
    """Return the **destination** header of an incoming frame, or :obj:`None` if it has none."""
    return frame.header(StompSpec.DESTINATION_HEADER)

def connected(frame):
    """Handle a **CONNECTED** frame. Returns a pair (version, session id) where a missing header yields :obj:`None` (STOMP 1.0 brokers do not send a **version** header).
    """
    _checkCommand(frame, [StompSpec.CONNECTED])
    return frame.header(StompSpec.VERSION_HEADER, StompSpec.VERSION_1_0), frame.header(StompSpec.SESSION_HEADER)

def error(frame):
    """Handle an **ERROR** frame. Returns a :class:`~.error.StompProtocolError` describing it.
    """
    _checkCommand(frame, [StompSpec.ERROR])
    message = frame.header(StompSpec.MESSAGE_HEADER)
    return StompProtocolError('Received %s' % (message or frame.info()))

# helpers

def headerList(headers):
    """Normalize **headers** (an iterable of pairs, a :obj:`dict`, or :obj:`None`) into a list of (name, value) pairs of strings."""
    if hasattr(headers, 'items'):
        headers = headers.items()
    return [(str(name), str(value)) for (name, value) in (headers or [])]

# private helper methods

def _receiptHeader(receipt):
    if not receipt:
        return []
    if not isinstance(receipt, str):
        raise StompProtocolError('Invalid receipt (not a string): %r' % receipt)
    return [(StompSpec.RECEIPT_HEADER, receipt)]

def _checkCommand(frame, commands=None):
    if frame.command not in (commands or StompSpec.COMMANDS):
        raise StompProtocolError('Cannot handle command: %s [expected=%s, headers=%s]' % (frame.command, ', '.join(commands), list(frame.headers)))
