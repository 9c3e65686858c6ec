"""stompmux is a STOMP client session layer for `Twisted <http://twistedmatrix.com/>`_: one broker connection, any number of topic listeners multiplexed over it, and sends which may be issued before the STOMP session is established.

.. seealso:: :mod:`stompmux.twisted` for the client, :mod:`stompmux.protocol` for the I/O-free building blocks.
"""
