"""
Twisted STOMP client

Copyright 2011 Mozes, Inc.

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
import re

from twisted.internet import reactor
from twisted.internet.endpoints import clientFromString

_URI = re.compile(r'^(?P<protocol>tcp|ssl)://(?P<host>[^:/\s]+):(?P<port>\d+)/?$')

def parseUri(uri):
    """Parse a broker URI of the form ``'tcp://host:port'`` (or ``ssl://``) into a :obj:`dict` with the keys **protocol**, **host**, and **port**."""
    match = _URI.match(uri or '')
    if not match:
        raise ValueError('invalid broker uri: %s' % uri)
    broker = match.groupdict()
    broker['port'] = int(broker['port'])
    return broker

def endpointFactory(broker, timeout=None):
    timeout = (':timeout=%d' % timeout) if timeout else ''
    return clientFromString(reactor, '%s:host=%s:port=%d%s' % (broker['protocol'], broker['host'], broker['port'], timeout))
