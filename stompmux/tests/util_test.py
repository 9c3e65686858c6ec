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
import unittest

from twisted.internet.endpoints import TCP4ClientEndpoint

from stompmux.twisted.util import endpointFactory, parseUri

class ParseUriTest(unittest.TestCase):
    def test_valid(self):
        self.assertEqual(parseUri('tcp://localhost:61613'), {'protocol': 'tcp', 'host': 'localhost', 'port': 61613})
        self.assertEqual(parseUri('ssl://broker.example.com:61612/'), {'protocol': 'ssl', 'host': 'broker.example.com', 'port': 61612})

    def test_invalid(self):
        for uri in (None, '', 'localhost:61613', 'tcp://localhost', 'udp://localhost:61613', 'tcp://localhost:port', 'failover:(tcp://localhost:61613)'):
            self.assertRaises(ValueError, parseUri, uri)

class EndpointFactoryTest(unittest.TestCase):
    def test_tcp(self):
        endpoint = endpointFactory(parseUri('tcp://localhost:61613'), 5)
        self.assertIsInstance(endpoint, TCP4ClientEndpoint)
        self.assertEqual((endpoint._host, endpoint._port, endpoint._timeout), ('localhost', 61613, 5))

if __name__ == '__main__':
    unittest.main()
