import json
import logging

from twisted.internet import defer, reactor

from stompmux.config import StompConfig
from stompmux.twisted import Stomp

class Producer(object):
    QUEUE = '/queue/testIn'

    def __init__(self, config=None):
        if config is None:
            config = StompConfig('tcp://localhost:61613')
        self.config = config

    @defer.inlineCallbacks
    def run(self):
        stomp = Stomp(self.config)
        # sends issued before the session is established are queued and flushed in order
        sent = [stomp.send(self.QUEUE, json.dumps({'count': j})) for j in range(10)]
        yield stomp.connect()
        yield defer.gatherResults(sent)
        yield stomp.disconnect()
        reactor.stop()

if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    Producer().run()
    reactor.run()
