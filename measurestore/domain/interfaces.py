from __future__ import annotations
from typing import Any, ContextManager, Iterator, Mapping, Protocol, runtime_checkable


@runtime_checkable
class DocumentRepository(Protocol):
    def insert_one(self, document: Mapping[str, Any]) -> Any:
        ...

    def find_all(self) -> ContextManager[Iterator[Mapping[str, Any]]]:
        ...

    def close(self) -> None:
        ...
