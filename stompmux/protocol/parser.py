"""
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
import collections
import re

from stompmux.error import StompFrameError

from .frame import StompFrame
from .spec import StompSpec

_END_OF_HEADERS = re.compile(b'\r?\n\r?\n')

class StompParser(object):
    """This is a parser for a wire-level byte-stream of STOMP frames. A malformed frame does not spoil the stream: it is reported once by :meth:`get` (as a :class:`~.error.StompFrameError`), and parsing resumes after its frame delimiter.
    """
    def canRead(self):
        """Indicates whether there are frames (or errors) available.
        """
        return bool(self._frames)

    def get(self):
        """Return the next frame as a :class:`StompFrame` object (if any), or :obj:`None` (otherwise). If the next frame was malformed, a :class:`~.error.StompFrameError` is raised instead.
        """
        if not self.canRead():
            return None
        frame = self._frames.popleft()
        if isinstance(frame, StompFrameError):
            raise frame
        return frame

    def add(self, data):
        """Add a byte-stream of wire-level data.

        :param data: A :obj:`bytes` chunk of any length; frames may span several chunks.
        """
        self._buffer.extend(data)
        while self._parse():
            pass

    def reset(self):
        """Reset internal state, including all fully or partially parsed frames.
        """
        self._frames = collections.deque()
        self._buffer = bytearray()
        self._skipping = False

    def __init__(self):
        self.reset()

    @property
    def pending(self):
        """Indicates whether there is unconsumed data which is not just end-of-line padding (heart-beats)."""
        return bool(self._buffer.strip(StompSpec.LINE_DELIMITER + StompSpec.CARRIAGE_RETURN)) or self._skipping

    def _parse(self):
        buffer = self._buffer
        if self._skipping and not self._skip():
            return False

        # optional EOLs between frames (and heart-beats)
        start = 0
        while buffer[start:start + 1] in (StompSpec.LINE_DELIMITER, StompSpec.CARRIAGE_RETURN):
            start += 1
        del buffer[:start]
        if not buffer:
            return False

        delimiter = buffer.find(StompSpec.FRAME_DELIMITER)
        match = _END_OF_HEADERS.search(buffer)
        if (delimiter != -1) and ((match is None) or (delimiter < match.start())):
            self._fail('Frame delimiter before end of headers: %r' % bytes(buffer[:delimiter]))
            del buffer[:delimiter + 1]
            return True
        if match is None:
            return False

        try:
            command, headers = self._parseHead(bytes(buffer[:match.start()]))
            length = self._contentLength(headers)
        except StompFrameError as e:
            self._frames.append(e)
            del buffer[:match.end()]
            self._skipping = True
            return True

        offset = match.end()
        if length is None:
            end = buffer.find(StompSpec.FRAME_DELIMITER, offset)
            if end == -1:
                return False
        else:
            end = offset + length
            if len(buffer) <= end:
                return False
            if buffer[end:end + 1] != StompSpec.FRAME_DELIMITER:
                self._fail('Frame delimiter missing after %d bytes of body [headers=%s]' % (length, headers))
                del buffer[:end]
                self._skipping = True
                return True

        body = bytes(buffer[offset:end])
        if (not body) and (length is None):
            body = None
        self._frames.append(StompFrame(command, headers, body))
        del buffer[:end + 1]
        return True

    def _parseHead(self, head):
        try:
            head = head.decode(StompSpec.ENCODING)
        except UnicodeDecodeError as e:
            raise StompFrameError('Invalid frame encoding [%s]' % e)
        lines = [line.rstrip('\r') for line in head.split('\n')]
        command = lines.pop(0)
        if command not in StompSpec.COMMANDS:
            raise StompFrameError('Invalid command: %r' % command)
        headers = []
        for line in lines:
            try:
                name, value = line.split(StompSpec.HEADER_SEPARATOR, 1)
            except ValueError:
                raise StompFrameError('No separator in header line: %s' % line)
            headers.append((name, value))
        return command, headers

    def _contentLength(self, headers):
        for (name, value) in headers:
            if name == StompSpec.CONTENT_LENGTH_HEADER:
                try:
                    length = int(value)
                except ValueError:
                    length = -1
                if length < 0:
                    raise StompFrameError('Invalid %s header: %r' % (StompSpec.CONTENT_LENGTH_HEADER, value))
                return length
        return None

    def _fail(self, message):
        self._frames.append(StompFrameError(message))

    def _skip(self):
        end = self._buffer.find(StompSpec.FRAME_DELIMITER)
        if end == -1:
            del self._buffer[:]
            return False
        del self._buffer[:end + 1]
        self._skipping = False
        return True

def parse(data):
    """Parse exactly one complete wire-level STOMP frame.

    :param data: The frame as :obj:`bytes` (the trailing frame delimiter included).

    Raises :class:`~.error.StompFrameError` if **data** is not a single well-formed STOMP frame.
    """
    parser = StompParser()
    parser.add(data)
    frame = parser.get()
    if frame is None:
        raise StompFrameError('Incomplete frame: %r' % bytes(data[:StompFrame.INFO_LENGTH]))
    if parser.canRead() or parser.pending:
        raise StompFrameError('Trailing data after %s' % frame.info())
    return frame
