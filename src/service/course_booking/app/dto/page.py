from typing import Generic, List, TypeVar

import attrs


T = TypeVar('T')


@attrs.define(frozen=True)
class Page(Generic[T]):
    items: List[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0
