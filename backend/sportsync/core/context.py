"""Process-wide application context.

One ``AppContext`` is built by ``create_app()`` and stored on
``app.state.context``; route handlers receive it through the ``Context``
dependency instead of importing module globals.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Request

from sportsync.core.config import Settings

if TYPE_CHECKING:
    from sportsync.auth.sessions import SessionStore
    from sportsync.data.news_client import NewsClient
    from sportsync.storage.base import Storage


@dataclass
class AppContext:
    """Everything a request handler needs besides the request itself."""

    settings: Settings
    storage: "Storage"
    sessions: "SessionStore"
    news_client: "NewsClient"


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the app's context."""
    context: AppContext = request.app.state.context
    return context


Context = Annotated[AppContext, Depends(get_context)]
