import json
import logging

from twisted.internet import defer, reactor

from stompmux.config import StompConfig
from stompmux.error import StompCancelledError
from stompmux.twisted import Stomp

class Consumer(object):
    QUEUE = '/queue/testIn'

    def __init__(self, config=None):
        if config is None:
            config = StompConfig('tcp://localhost:61613')
        self.config = config

    @defer.inlineCallbacks
    def run(self):
        stomp = yield Stomp(self.config).connect()
        headers = {
            # the maximal number of messages the broker will let you work on at the same time
            'activemq.prefetchSize': '100',
        }
        # both topics share one subscription
        stomp.topic(self.QUEUE, headers, handler=self.log)
        topic = stomp.topic(self.QUEUE)
        reactor.callLater(10, topic.cancel)
        try:
            for frame in topic:
                frame = yield frame
                data = json.loads(frame.body.decode('utf-8'))
                print('Received frame with count %d' % data['count'])
        except StompCancelledError:
            pass
        yield stomp.disconnect()
        reactor.stop()

    def log(self, frame):
        logging.getLogger(__name__).info('Received %s' % frame.info())

if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    Consumer().run()
    reactor.run()
