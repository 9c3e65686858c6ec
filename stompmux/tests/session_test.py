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
import itertools
import unittest

import mock

from stompmux.error import StompProtocolError
from stompmux.protocol import StompFrame, StompSession, StompSpec, StompSubscriptions, commands

class StompSubscriptionsTest(unittest.TestCase):
    def setUp(self):
        ids = itertools.count()
        self.subscriptions = StompSubscriptions(idFactory=lambda: str(next(ids)))

    def test_reference_counting(self):
        listener1, listener2 = mock.Mock(), mock.Mock()
        subscription, created = self.subscriptions.add('/queue/a', listener1, [('foo', 'bar')])
        self.assertTrue(created)
        self.assertEqual(subscription.id, '0')
        self.assertEqual(subscription.headers, [('foo', 'bar')])
        self.assertIn('/queue/a', self.subscriptions)

        again, created = self.subscriptions.add('/queue/a', listener2)
        self.assertFalse(created)
        self.assertIs(again, subscription)
        self.assertEqual(self.subscriptions.listeners('/queue/a'), (listener1, listener2))

        self.assertIsNone(self.subscriptions.remove('/queue/a', listener1))
        self.assertIn('/queue/a', self.subscriptions)
        self.assertIs(self.subscriptions.remove('/queue/a', listener2), subscription)
        self.assertNotIn('/queue/a', self.subscriptions)
        self.assertEqual(self.subscriptions.listeners('/queue/a'), ())

    def test_remove_is_idempotent(self):
        listener = mock.Mock()
        self.subscriptions.add('/queue/a', listener)
        self.assertIsNotNone(self.subscriptions.remove('/queue/a', listener))
        self.assertIsNone(self.subscriptions.remove('/queue/a', listener))
        self.assertIsNone(self.subscriptions.remove('/queue/nope', listener))

    def test_same_listener_twice(self):
        listener = mock.Mock()
        self.subscriptions.add('/queue/a', listener)
        self.subscriptions.add('/queue/a', listener)
        self.assertEqual(self.subscriptions.listeners('/queue/a'), (listener,))

    def test_fresh_id_per_cycle(self):
        listener = mock.Mock()
        first, _ = self.subscriptions.add('/queue/a', listener)
        self.subscriptions.remove('/queue/a', listener)
        second, _ = self.subscriptions.add('/queue/a', listener)
        self.assertNotEqual(first.id, second.id)

    def test_iteration_order(self):
        for destination in ('/queue/c', '/queue/a', '/queue/b'):
            self.subscriptions.add(destination, mock.Mock())
        self.assertEqual([s.destination for s in self.subscriptions], ['/queue/c', '/queue/a', '/queue/b'])
        self.assertEqual(len(self.subscriptions), 3)
        self.subscriptions.clear()
        self.assertEqual(list(self.subscriptions), [])

    def test_default_ids_are_unique(self):
        subscriptions = StompSubscriptions()
        ids = set(subscriptions.add('/queue/%d' % i, mock.Mock())[0].id for i in range(100))
        self.assertEqual(len(ids), 100)

class StompSessionTest(unittest.TestCase):
    def setUp(self):
        ids = itertools.count()
        self.session = StompSession(idFactory=lambda: 'sub-%d' % next(ids))

    def _connected(self):
        return StompFrame(StompSpec.CONNECTED, [(StompSpec.VERSION_HEADER, '1.1'), (StompSpec.SESSION_HEADER, '4711')])

    def test_session_init(self):
        self.assertEqual(self.session.state, StompSession.DISCONNECTED)
        self.assertFalse(self.session.isConnected())
        self.assertEqual(self.session.id, None)
        self.assertEqual(self.session.version, None)
        self.assertEqual(self.session.pending, ())

    def test_session_connect(self):
        session = StompSession(login='hi', passcode='there', host='earth')
        frame = session.connect([('heart-beat', '0,0')])
        self.assertEqual(frame, commands.connect([('heart-beat', '0,0')], 'hi', 'there', 'earth'))
        self.assertEqual(frame.headers[0], (StompSpec.ACCEPT_VERSION_HEADER, '1.1,1.0'))
        self.assertEqual(session.state, StompSession.CONNECTING)
        self.assertFalse(session.isConnected())
        self.assertEqual(session.connected(self._connected()), [])
        self.assertEqual(session.state, StompSession.CONNECTED)
        self.assertTrue(session.isConnected())
        self.assertEqual(session.id, '4711')
        self.assertEqual(session.version, '1.1')
        session.close()
        self.assertEqual(session.state, StompSession.DISCONNECTED)
        self.assertEqual(session.id, None)

    def test_session_disconnect(self):
        self.assertEqual(self.session.disconnect(), None)
        self.session.connect()
        self.session.connected(self._connected())
        self.assertEqual(self.session.disconnect(receipt='bye'), commands.disconnect('bye'))
        self.assertFalse(self.session.isConnected())

    def test_pending_sends(self):
        frames = [commands.send('/queue/a', str(i)) for i in range(3)]
        contexts = [object() for _ in frames]
        for (frame, context) in zip(frames, contexts):
            self.assertFalse(self.session.send(frame, context))
        self.session.connect()
        self.assertFalse(self.session.send(commands.send('/queue/a', 'late'), None))
        self.assertEqual(len(self.session.pending), 4)

        pending = self.session.connected(self._connected())
        self.assertEqual(pending[:3], list(zip(frames, contexts)))
        self.assertEqual(pending[3][0].body, b'late')
        self.assertEqual(self.session.pending, ())
        self.assertTrue(self.session.send(commands.send('/queue/a', 'now')))
        self.assertEqual(self.session.pending, ())

        # flushed exactly once
        self.session.close()
        self.session.connect()
        self.assertEqual(self.session.connected(self._connected()), [])

    def test_pending_sends_survive_close(self):
        frame = commands.send('/queue/a', 'hi')
        self.session.send(frame)
        self.session.connect()
        self.session.close()
        self.session.disconnect()
        self.assertEqual(self.session.pending, (frame,))

    def test_cancel_pending_send(self):
        context1, context2 = object(), object()
        self.session.send(commands.send('/queue/a', '1'), context1)
        self.session.send(commands.send('/queue/a', '2'), context2)
        self.assertTrue(self.session.cancel(context1))
        self.assertFalse(self.session.cancel(context1))
        self.assertEqual([f.body for f in self.session.pending], [b'2'])

    def test_session_subscribe(self):
        listener1, listener2 = mock.Mock(), mock.Mock()
        frame = self.session.subscribe('/queue/a', listener1, {'foo': 'bar'})
        self.assertEqual(frame, commands.subscribe('/queue/a', 'sub-0', [('foo', 'bar')]))
        self.assertEqual(self.session.subscribe('/queue/a', listener2, {'ignored': 'header'}), None)

        message = StompFrame(StompSpec.MESSAGE, {StompSpec.DESTINATION_HEADER: '/queue/a'}, 'hi')
        self.assertEqual(self.session.listeners(message), (listener1, listener2))
        self.assertEqual(self.session.listeners(message.replace(headers=[(StompSpec.DESTINATION_HEADER, '/queue/b')])), ())
        self.assertEqual(self.session.listeners(StompFrame(StompSpec.MESSAGE)), ())

        self.assertEqual(self.session.unsubscribe('/queue/a', listener1), None)
        self.assertEqual(self.session.unsubscribe('/queue/a', listener2), commands.unsubscribe('sub-0'))
        self.assertEqual(self.session.unsubscribe('/queue/a', listener2), None)

        frame = self.session.subscribe('/queue/a', listener1)
        self.assertEqual(frame.header(StompSpec.ID_HEADER), 'sub-1')

    def test_invalid_subscribe_attaches_nothing(self):
        listener = mock.Mock()
        self.assertRaises(StompProtocolError, self.session.subscribe, '/queue/a', listener, {StompSpec.ACK_HEADER: 'bogus'})
        self.assertNotIn('/queue/a', self.session.subscriptions)
        self.assertRaises(StompProtocolError, self.session.subscribe, '', listener)
        self.assertEqual(len(self.session.subscriptions), 0)

        frame = self.session.subscribe('/queue/a', listener)
        self.assertEqual(frame.header(StompSpec.ACK_HEADER), StompSpec.ACK_AUTO)
        self.assertEqual(self.session.listeners(StompFrame(StompSpec.MESSAGE, {StompSpec.DESTINATION_HEADER: '/queue/a'})), (listener,))

        session = StompSession(ackMode='bogus')
        self.assertRaises(StompProtocolError, session.subscribe, '/queue/a', listener)
        self.assertNotIn('/queue/a', session.subscriptions)

    def test_session_ack_mode(self):
        session = StompSession(ackMode=StompSpec.ACK_CLIENT)
        frame = session.subscribe('/queue/a', mock.Mock())
        self.assertEqual(frame.header(StompSpec.ACK_HEADER), StompSpec.ACK_CLIENT)
        frame = session.subscribe('/queue/b', mock.Mock(), {StompSpec.ACK_HEADER: StompSpec.ACK_AUTO})
        self.assertEqual(frame.header(StompSpec.ACK_HEADER), StompSpec.ACK_AUTO)

    def test_subscriptions_survive_close(self):
        listener = mock.Mock()
        self.session.subscribe('/queue/a', listener, {'foo': 'bar'})
        self.session.subscribe('/queue/b', listener)
        self.session.connect()
        self.session.connected(self._connected())
        self.session.close()
        self.assertIn('/queue/a', self.session.subscriptions)
        self.assertEqual(self.session.replay(), [
            commands.subscribe('/queue/a', 'sub-0', [('foo', 'bar')]),
            commands.subscribe('/queue/b', 'sub-1')
        ])
        # replaying does not touch the registry
        self.assertEqual(len(self.session.replay()), 2)

if __name__ == '__main__':
    unittest.main()
