# backend/data/users.py
# User accounts: email -> {password_hash, display_name, uid}

import threading
import uuid
from functools import lru_cache
from typing import Dict, Optional

import config

USERS_COLLECTION = "users"


class UserAlreadyExists(Exception):
    """Raised when registering an email that already has an account."""


class UserStore:
    def get_user(self, email: str) -> Optional[dict]:
        raise NotImplementedError

    def create_user(self, email: str, password_hash: str, display_name: Optional[str] = None) -> dict:
        raise NotImplementedError


def _new_user(email: str, password_hash: str, display_name: Optional[str]) -> dict:
    return {
        "uid": uuid.uuid4().hex,
        "email": email,
        "password_hash": password_hash,
        "display_name": display_name or email.split("@")[0],
    }


class InMemoryUserStore(UserStore):
    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[str, dict] = {}

    def get_user(self, email: str) -> Optional[dict]:
        with self._lock:
            return self._users.get(email.lower())

    def create_user(self, email: str, password_hash: str, display_name: Optional[str] = None) -> dict:
        key = email.lower()
        with self._lock:
            if key in self._users:
                raise UserAlreadyExists(f"An account for {email} already exists.")
            user = _new_user(key, password_hash, display_name)
            self._users[key] = user
        return user


class FirestoreUserStore(UserStore):
    def __init__(self, db=None):
        from data.store import get_firestore_client

        self.db = db if db is not None else get_firestore_client()

    def get_user(self, email: str) -> Optional[dict]:
        snapshot = self.db.collection(USERS_COLLECTION).document(email.lower()).get()
        return snapshot.to_dict() if snapshot.exists else None

    def create_user(self, email: str, password_hash: str, display_name: Optional[str] = None) -> dict:
        key = email.lower()
        doc_ref = self.db.collection(USERS_COLLECTION).document(key)
        if doc_ref.get().exists:
            raise UserAlreadyExists(f"An account for {email} already exists.")
        user = _new_user(key, password_hash, display_name)
        doc_ref.set(user)
        return user


@lru_cache
def get_user_store() -> UserStore:
    if config.EVENT_STORE == "firestore":
        return FirestoreUserStore()
    return InMemoryUserStore()
