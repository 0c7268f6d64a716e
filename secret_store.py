"""Runtime-configurable admin passkey, held by the app and injected into routes."""

import hmac
import logging
import threading

logger = logging.getLogger(__name__)

MIN_SECRET_LENGTH = 3


class AdminSecretStore:
    def __init__(self, initial: str):
        self._lock = threading.Lock()
        self._value = self._validate(initial)

    @staticmethod
    def _validate(value: str) -> str:
        value = (value or "").strip()
        if len(value) < MIN_SECRET_LENGTH:
            raise ValueError(f"Secret code must be at least {MIN_SECRET_LENGTH} characters long")
        return value

    @property
    def value(self) -> str:
        with self._lock:
            return self._value

    def verify(self, candidate: str) -> bool:
        if not isinstance(candidate, str):
            return False
        return hmac.compare_digest(candidate.encode(), self.value.encode())

    def update(self, new_value: str) -> str:
        value = self._validate(new_value)
        with self._lock:
            self._value = value
        logger.info("Admin secret code updated")
        return value
