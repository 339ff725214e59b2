import threading
from contextlib import contextmanager
from typing import Dict, Hashable


class UserLockRegistry:
    """
    One lock per user identity.

    Progress updates for the same user run one at a time; different users
    never wait on each other.
    """

    def __init__(self):
        self._locks: Dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, identity: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(identity)
            if lock is None:
                lock = threading.Lock()
                self._locks[identity] = lock
            return lock

    @contextmanager
    def hold(self, identity: Hashable):
        lock = self.get(identity)
        with lock:
            yield


user_locks = UserLockRegistry()
