""" Curseurs à passage unique et adaptateurs paresseux """
from __future__ import annotations
from typing import Callable, Optional, TypeVar
from collections.abc import Iterable
import itertools
import logging

from . import extensions as X

logger = logging.getLogger(__name__)

T = TypeVar('T')

def _call(func: Callable, *args):
    """ Appelle une fonction utilisateur hors du protocole d'itération.

        Un StopIteration levé par la fonction mettrait fin au curseur en silence :
        il est converti en RuntimeError, comme pour un générateur.
    """
    try:
        return func(*args)
    except StopIteration as e:
        raise RuntimeError(f"StopIteration levée par {func!r}.") from e

class Cursor:
    """ Curseur à passage unique sur une séquence.

        Une fois épuisé, le curseur le reste : tous les appels suivants à next()
        lèvent StopIteration, même si la source sous-jacente « revit ».

        Les sous-classes n'ont qu'à surcharger _advance().
    """
    def __init__(self, source: Optional[Iterable[T]] = None):
        self.source = iter(source) if source is not None else None
        self.exhausted = False

    def __iter__(self):
        return self

    def __next__(self) -> T:
        if self.exhausted:
            raise StopIteration

        try:
            return self._advance()
        except StopIteration:
            self.exhausted = True
            raise

    def _advance(self) -> T:
        if self.source is None:
            raise StopIteration
        return next(self.source)

    def __repr__(self):
        state = "épuisé" if self.exhausted else "actif"
        return f"{type(self).__name__}({state})"

    # --- ADAPTATEURS ---
    def where(self, predicate: Callable, indexed: bool = False) -> FilterCursor:
        return FilterCursor(predicate=predicate, cursor=self, indexed=indexed)

    def select(self, selector: Callable, indexed: bool = False) -> ProjectCursor:
        return ProjectCursor(selector=selector, cursor=self, indexed=indexed)

    def chain(self, *others: Iterable[T]) -> ChainCursor:
        return ChainCursor(self, *others)

    def intersect(self, other: Iterable[T]) -> IntersectCursor:
        return IntersectCursor(cursor=self, other=other)

    # --- EXTENSIONS SCALAIRES ---
    def single(self) -> Optional[T]:
        return X.single(self)

    def single_or(self, default: T) -> T:
        return X.single_or(self, default)

    def single_or_else(self, producer: Callable[[], T]) -> T:
        return X.single_or_else(self, producer)

    def single_or_default(self, kind: Optional[Callable[[], T]] = None) -> Optional[T]:
        return X.single_or_default(self, kind)

    def first(self) -> Optional[T]:
        return X.first(self)

    def first_or(self, default: T) -> T:
        return X.first_or(self, default)

    def first_or_else(self, producer: Callable[[], T]) -> T:
        return X.first_or_else(self, producer)

    def first_or_default(self, kind: Optional[Callable[[], T]] = None) -> Optional[T]:
        return X.first_or_default(self, kind)

    def last(self) -> Optional[T]:
        return X.last(self)

    def last_or(self, default: T) -> T:
        return X.last_or(self, default)

    def last_or_else(self, producer: Callable[[], T]) -> T:
        return X.last_or_else(self, producer)

    def last_or_default(self, kind: Optional[Callable[[], T]] = None) -> Optional[T]:
        return X.last_or_default(self, kind)

    def count(self, predicate: Optional[Callable[[T], bool]] = None) -> int:
        return X.count(self, predicate)

    def any(self, predicate: Optional[Callable[[T], bool]] = None) -> bool:
        return X.any_of(self, predicate)

    def all(self, predicate: Callable[[T], bool]) -> bool:
        return X.all_of(self, predicate)

    def to_list(self) -> list[T]:
        return list(self)

class EmptyCursor(Cursor):
    """ Curseur vide, épuisé dès le premier appel """
    def __init__(self):
        super().__init__()

class FilterCursor(Cursor):
    """ Curseur réalisant un filtre

        Si *indexed* est vrai, le prédicat reçoit (position, élément), la position
        étant celle de l'élément dans le curseur source.
    """
    def __init__(self, predicate: Callable, cursor: Iterable, indexed: bool = False):
        super().__init__()
        self.predicate = predicate
        self.cursor = enumerate(cursor) if indexed else iter(cursor)
        self.indexed = indexed

    def _advance(self):
        if self.indexed:
            while True:
                idx, item = next(self.cursor)
                if _call(self.predicate, idx, item):
                    return item

        while True:
            item = next(self.cursor)
            if _call(self.predicate, item):
                return item

class ProjectCursor(Cursor):
    """ Curseur réalisant une projection des éléments par appel de fonction """
    def __init__(self, selector: Callable, cursor: Iterable, indexed: bool = False):
        super().__init__()
        self.selector = selector
        self.cursor = enumerate(cursor) if indexed else iter(cursor)
        self.indexed = indexed

    def _advance(self):
        if self.indexed:
            idx, item = next(self.cursor)
            return _call(self.selector, idx, item)

        item = next(self.cursor)
        return _call(self.selector, item)

class ChainCursor(Cursor):
    """ Curseur enchaînant plusieurs curseurs, dans l'ordre """
    def __init__(self, *cursors: Iterable):
        super().__init__(itertools.chain.from_iterable(cursors))

class RepeatCursor(Cursor):
    """ Répète une valeur *times* fois, indéfiniment si *times* n'est pas défini. """
    def __init__(self, value: T, times: Optional[int] = None):
        if times is not None and times < 0:
            raise ValueError(f"Le nombre de répétitions doit être positif ({times}).")

        super().__init__()
        self.value = value
        self.remaining = times

    def _advance(self):
        if self.remaining is None:
            return self.value

        if self.remaining == 0:
            raise StopIteration

        self.remaining -= 1
        return self.value

class IntersectCursor(Cursor):
    """ Intersection de deux curseurs.

        Au premier appel, *other* est matérialisé dans un ensemble ; le curseur
        retourne ensuite chaque élément de *cursor* présent dans cet ensemble, une
        seule fois, dans l'ordre de *cursor*.

        Les éléments doivent être hachables.
    """
    def __init__(self, cursor: Iterable[T], other: Iterable[T]):
        super().__init__()
        self.cursor = iter(cursor)
        self.other = other
        self.allowed: Optional[set] = None

    def _advance(self):
        if self.allowed is None:
            self.allowed = set(self.other)
            self.other = None
            logger.debug(f"Intersection: {len(self.allowed)} élément(s) matérialisé(s).")

        while True:
            item = next(self.cursor)
            # Un élément déjà retourné est retiré de l'ensemble : pas de doublon.
            if item in self.allowed:
                self.allowed.discard(item)
                return item

def open_cursor(source: Optional[Iterable[T]] = None) -> Cursor:
    """ Ouvre un curseur sur la source. Retourne la source si c'est déjà un curseur. """
    if isinstance(source, Cursor):
        return source

    if source is None:
        return EmptyCursor()

    return Cursor(source)

def empty() -> Cursor:
    return EmptyCursor()

def repeat(value: T, times: Optional[int] = None) -> Cursor:
    return RepeatCursor(value, times=times)

def chain(*sources: Iterable) -> Cursor:
    return ChainCursor(*sources)

def intersect(cursor: Iterable[T], other: Iterable[T]) -> Cursor:
    return IntersectCursor(cursor=cursor, other=other)
