# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from userhub.infrastructure.db import Database


def check_database(db: Database) -> bool:
    return db.ping()


__all__ = ["check_database"]
