"""
FastAPI dependencies shared by the resource routers.
"""

from __future__ import annotations

from fastapi import Request

from .db import Database


def get_database(request: Request) -> Database:
    # Set once by create_app(); there is no process-wide pool.
    return request.app.state.database
