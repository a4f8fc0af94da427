"""
Request dependencies.

The config and shared clients live on `app.state`, set up by `create_app`.
"""

from typing import Tuple

from fastapi import Request

from services.config import RelayConfig
from services.runtime import RelayClients


def get_runtime(request: Request) -> Tuple[RelayConfig, RelayClients]:
    state = request.app.state
    return state.config, state.clients
