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
class StompConfig(object):
    """This is a container for the configuration options which are needed to establish a STOMP connection. All parameters are available as attributes with the same name of this object.

    :param uri: The broker URI, for instance ``'tcp://localhost:61613'`` or ``'ssl://broker.example.com:61614'``.
    :param login: The login for the STOMP broker, or :obj:`None` (no **login** header).
    :param passcode: The passcode for the STOMP broker, or :obj:`None` (no **passcode** header).
    :param host: The virtual host for the **host** header of the *CONNECT* frame, or :obj:`None` (no such header).
    :param headers: Additional headers for every *CONNECT* frame (an iterable of pairs or a :obj:`dict`).
    :param ackMode: The default acknowledgment mode for *SUBSCRIBE* frames (:obj:`None` is equivalent to :attr:`StompSpec.DEFAULT_ACK_MODE`).
    :param connectTimeout: The time (in seconds) to wait for the wire-level connection to be established. If :obj:`None`, we will wait indefinitely.
    """
    def __init__(self, uri, login=None, passcode=None, host=None, headers=None, ackMode=None, connectTimeout=None):
        self.uri = uri
        self.login = login
        self.passcode = passcode
        self.host = host
        self.headers = headers
        self.ackMode = ackMode
        self.connectTimeout = connectTimeout
