# File: civicfeed/db/session.py
from fastapi import Request

from civicfeed.db.store import MemoryStore


def get_store(request: Request) -> MemoryStore:
    return request.app.state.store


def get_classifier(request: Request):
    return request.app.state.classifier
