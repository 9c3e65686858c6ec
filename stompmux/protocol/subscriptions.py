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
import uuid

class StompSubscription(object):
    """An active subscription to one destination, shared by all listeners attached to it.

    :param destination: The destination path.
    :param id: The subscription id sent with the **SUBSCRIBE** frame and, eventually, with the **UNSUBSCRIBE** frame.
    :param headers: The additional headers the first listener subscribed with.
    :param generation: Registration order within the owning :class:`StompSubscriptions` object.
    """
    def __init__(self, destination, id, headers, generation):
        self.destination = destination
        self.id = id
        self.headers = list(headers or [])
        self.generation = generation
        self.listeners = []

    def __repr__(self):
        return '%s(destination=%r, id=%r, listeners=%d)' % (self.__class__.__name__, self.destination, self.id, len(self.listeners))

class StompSubscriptions(object):
    """This object is the registry of active subscriptions keyed by destination. A destination is registered if and only if at least one listener is attached to it, so the registry alone decides whether a **SUBSCRIBE** or **UNSUBSCRIBE** frame is due.

    :param idFactory: A callable producing a fresh, unique subscription id, or :obj:`None` (random UUIDs).
    """
    def __init__(self, idFactory=None):
        self._idFactory = idFactory or (lambda: str(uuid.uuid4()))
        self._generation = itertools.count()
        self._subscriptions = {}

    def __contains__(self, destination):
        return destination in self._subscriptions

    def __len__(self):
        return len(self._subscriptions)

    def __iter__(self):
        """Iterate over the active subscriptions, oldest first."""
        return iter(sorted(self._subscriptions.values(), key=lambda s: s.generation))

    def get(self, destination):
        return self._subscriptions.get(destination)

    def add(self, destination, listener, headers=None):
        """Attach **listener** to **destination**. Returns a pair (subscription, created) where created is :obj:`True` if this is the first listener, that is, the caller has to send a **SUBSCRIBE** frame.
        """
        created = destination not in self._subscriptions
        if created:
            self._subscriptions[destination] = StompSubscription(destination, self._idFactory(), headers, next(self._generation))
        subscription = self._subscriptions[destination]
        if listener not in subscription.listeners:
            subscription.listeners.append(listener)
        return subscription, created

    def remove(self, destination, listener):
        """Detach **listener** from **destination**. Returns the subscription if this was its last listener (the caller has to send an **UNSUBSCRIBE** frame), or :obj:`None` otherwise. Removing a listener which is not attached is a no-op.
        """
        subscription = self._subscriptions.get(destination)
        if (subscription is None) or (listener not in subscription.listeners):
            return None
        subscription.listeners.remove(listener)
        if subscription.listeners:
            return None
        return self._subscriptions.pop(destination)

    def listeners(self, destination):
        """A snapshot of the listeners attached to **destination** (empty if there are none)."""
        subscription = self._subscriptions.get(destination)
        return tuple(subscription.listeners) if subscription else ()

    def clear(self):
        self._subscriptions = {}
