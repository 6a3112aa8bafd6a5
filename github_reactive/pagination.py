"""
Paged listings exposed as flat observables.
"""

from typing import Any, AsyncIterator, Dict, Optional, Type, TypeVar

from pydantic import BaseModel

from github_api.connection import Connection
from github_reactive.observable import Observable

M = TypeVar("M", bound=BaseModel)


def get_and_flatten_all_pages(connection: Connection, uri: str, model: Type[M],
                              params: Optional[Dict[str, Any]] = None) -> Observable[M]:
    """Emit every item of every page, requesting the next page only when needed."""

    async def source() -> AsyncIterator[M]:
        async for page in connection.get_pages(uri, params=params):
            for item in page.body or []:
                yield model.model_validate(item)

    return Observable(source)
