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
from .spec import StompSpec

_KEEP = object()

class StompFrame(object):
    """This object represents a STOMP frame which consists of a STOMP :attr:`command`, an ordered sequence of :attr:`headers`, and an optional message :attr:`body`. Frames are immutable; :meth:`replace` produces a modified copy. Its wire-level representation is available via :meth:`serialize` (or :func:`bytes`).

    :param command: A STOMP command, for instance :attr:`StompSpec.SEND`.
    :param headers: An iterable of (name, value) pairs or a :obj:`dict`. Order is kept and repeated names are legal.
    :param body: The message body, either :obj:`bytes`, a text (encoded as UTF-8), or :obj:`None` (no body at all, which is not the same as an empty body).
    """
    INFO_LENGTH = 20

    __slots__ = ('_command', '_headers', '_body')

    def __init__(self, command='', headers=None, body=None):
        if hasattr(headers, 'items'):
            headers = headers.items()
        object.__setattr__(self, '_command', str(command))
        object.__setattr__(self, '_headers', tuple((str(name), str(value)) for (name, value) in (headers or ())))
        object.__setattr__(self, '_body', _encode(body))

    @property
    def command(self):
        return self._command

    @property
    def headers(self):
        return self._headers

    @property
    def body(self):
        return self._body

    def header(self, name, default=None):
        """Return the value of the first header called **name** (repeated headers: the first entry wins), or **default** if there is no such header."""
        for (key, value) in self._headers:
            if key == name:
                return value
        return default

    def replace(self, command=None, headers=None, body=_KEEP):
        """Return a copy of this frame with the given attributes replaced. Pass ``body=b''`` to empty the body of a copy, and ``body=None`` to drop it."""
        return self.__class__(
            self._command if (command is None) else command,
            self._headers if (headers is None) else headers,
            self._body if (body is _KEEP) else body
        )

    def serialize(self):
        """Render the wire-level STOMP frame."""
        headers = b''.join(('%s%s%s' % (name, StompSpec.HEADER_SEPARATOR, value)).encode(StompSpec.ENCODING) + StompSpec.LINE_DELIMITER for (name, value) in self._headers)
        return StompSpec.LINE_DELIMITER.join([self._command.encode(StompSpec.ENCODING), headers, (self._body or b'') + StompSpec.FRAME_DELIMITER])

    __bytes__ = serialize

    def __setattr__(self, name, value):
        raise AttributeError('%s is immutable' % self.__class__.__name__)

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, ', '.join('%s=%r' % (key, getattr(self, key)) for key in ('command', 'headers', 'body')))

    def __eq__(self, other):
        if not isinstance(other, StompFrame):
            return NotImplemented
        return all(getattr(self, key) == getattr(other, key) for key in ('command', 'headers', 'body'))

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if (result is NotImplemented) else not result

    def __hash__(self):
        return hash((self._command, self._headers, self._body))

    def info(self):
        """Produce a log-friendly representation of the frame (show only non-trivial content, and truncate the message to INFO_LENGTH characters.)"""
        headers = self._headers and 'headers=%s' % (list(self._headers),)
        body = self._body or b''
        info = body[:self.INFO_LENGTH]
        if len(info) < len(body):
            info += b'...'
        info = info and ('body=%r' % info)
        info = ', '.join(i for i in (headers, info) if i)
        return '%s frame%s' % (self._command, info and (' [%s]' % info))

def _encode(body):
    if body is None:
        return None
    if isinstance(body, str):
        return body.encode(StompSpec.ENCODING)
    return bytes(body)
