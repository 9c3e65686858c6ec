"""The :mod:`~.protocol` package is a collection of generic components each of which you can use independently for your own STOMP related functionality.

.. note:: Please restrict your imports to the main package :mod:`stompmux.protocol`. The subpackage structure is potentially unstable.
"""
from . import commands
from .frame import StompFrame
from .parser import StompParser, parse
from .session import StompSession
from .spec import StompSpec
from .subscriptions import StompSubscription, StompSubscriptions
