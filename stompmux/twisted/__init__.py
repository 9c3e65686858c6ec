"""
The ``twisted.Stomp`` client is based on `Twisted <http://twistedmatrix.com/>`_. It multiplexes any number of topic listeners over one broker connection, and buffers sends issued before the STOMP session is established.
"""
from .client import Stomp
from .protocol import StompLifecycleEvent, StompTransport
from .stream import StompObservable, StompTopic
