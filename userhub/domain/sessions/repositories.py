# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Session


class SessionStore(Protocol):
    def get(self, session_id: str) -> Session | None: ...

    # Assigns an id to an unsaved session and starts a fresh expiry window.
    def save(self, session: Session) -> Session: ...

    def touch(self, session: Session) -> Session: ...
    def destroy(self, session_id: str) -> None: ...
