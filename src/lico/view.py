from __future__ import annotations
from typing import TypeVar
from collections.abc import Sequence

from .cursor import Cursor

T = TypeVar('T')

class View:
    """ Vue non consommante sur une collection.

        len() peut être demandé autant de fois que nécessaire sans modifier les
        données, alors que count() sur un curseur est un décompte consommant qui ne
        peut être fait qu'une fois.
    """
    def __init__(self, items: Sequence[T]):
        self.items = items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Cursor:
        return self.cursor()

    def __contains__(self, item: T) -> bool:
        return item in self.items

    def cursor(self) -> Cursor:
        """ Ouvre un nouveau curseur consommant sur la collection """
        return Cursor(self.items)

    def __repr__(self):
        return f"View(len={len(self)})"
