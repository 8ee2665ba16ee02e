""" Extensions scalaires sur les curseurs

Fonctions libres qui dérivent une valeur (présence, unicité, premier ou dernier
élément) d'un curseur sans que l'appelant ait à piloter l'itération.

Un itérateur passé en paramètre est avancé sur place : la consommation reste
visible pour l'appelant. Un itérable quelconque est parcouru via iter().
"""
from __future__ import annotations
from typing import Callable, Optional, TypeVar
from collections.abc import Iterable

T = TypeVar('T')

Producer = Callable[[], T]
Predicate = Callable[[T], bool]

# Marque l'absence d'élément, None pouvant être un élément légitime.
_ABSENT = object()

def _single(cursor: Iterable[T]):
    it = iter(cursor)

    item = next(it, _ABSENT)
    if item is _ABSENT:
        return _ABSENT

    if next(it, _ABSENT) is not _ABSENT:
        return _ABSENT

    return item

def _first(cursor: Iterable[T]):
    return next(iter(cursor), _ABSENT)

def _last(cursor: Iterable[T]):
    item = _ABSENT
    for item in cursor:
        pass
    return item

def _default(kind: Optional[Callable[[], T]]) -> Optional[T]:
    return kind() if kind is not None else None

# --- SINGLE ---
def single(cursor: Iterable[T]) -> Optional[T]:
    """ Retourne l'unique élément du curseur, None s'il est vide ou en contient plusieurs.

        Le curseur est avancé au plus deux fois.
    """
    item = _single(cursor)
    return None if item is _ABSENT else item

def single_or(cursor: Iterable[T], default: T) -> T:
    """ Comme single, mais retourne *default* si le curseur ne contient pas exactement un élément. """
    item = _single(cursor)
    return default if item is _ABSENT else item

def single_or_else(cursor: Iterable[T], producer: Producer) -> T:
    """ Comme single_or, mais la valeur de repli n'est calculée qu'en cas de besoin. """
    item = _single(cursor)
    return producer() if item is _ABSENT else item

def single_or_default(cursor: Iterable[T], kind: Optional[Callable[[], T]] = None) -> Optional[T]:
    """ Comme single_or, la valeur de repli est la valeur par défaut du type *kind* (int() = 0).

        Sans type, la valeur de repli est None.
    """
    item = _single(cursor)
    return _default(kind) if item is _ABSENT else item

# --- FIRST ---
def first(cursor: Iterable[T]) -> Optional[T]:
    """ Retourne le premier élément du curseur, None s'il est vide. Le curseur est avancé une fois. """
    item = _first(cursor)
    return None if item is _ABSENT else item

def first_or(cursor: Iterable[T], default: T) -> T:
    """ Retourne le premier élément du curseur, ou *default* s'il est vide. """
    item = _first(cursor)
    return default if item is _ABSENT else item

def first_or_else(cursor: Iterable[T], producer: Producer) -> T:
    """ Comme first_or, mais la valeur de repli n'est calculée qu'en cas de besoin. """
    item = _first(cursor)
    return producer() if item is _ABSENT else item

def first_or_default(cursor: Iterable[T], kind: Optional[Callable[[], T]] = None) -> Optional[T]:
    """ Comme first_or, la valeur de repli est la valeur par défaut du type *kind*, None sans type. """
    item = _first(cursor)
    return _default(kind) if item is _ABSENT else item

# --- LAST ---
# Ces opérations consomment l'intégralité du curseur.
def last(cursor: Iterable[T]) -> Optional[T]:
    """ Retourne le dernier élément du curseur, None s'il est vide. """
    item = _last(cursor)
    return None if item is _ABSENT else item

def last_or(cursor: Iterable[T], default: T) -> T:
    """ Retourne le dernier élément du curseur, ou *default* s'il est vide. """
    item = _last(cursor)
    return default if item is _ABSENT else item

def last_or_else(cursor: Iterable[T], producer: Producer) -> T:
    """ Comme last_or, mais la valeur de repli n'est calculée qu'en cas de besoin. """
    item = _last(cursor)
    return producer() if item is _ABSENT else item

def last_or_default(cursor: Iterable[T], kind: Optional[Callable[[], T]] = None) -> Optional[T]:
    """ Comme last_or, la valeur de repli est la valeur par défaut du type *kind*, None sans type. """
    item = _last(cursor)
    return _default(kind) if item is _ABSENT else item

# --- AGGREGATS ---
def count(cursor: Iterable[T], predicate: Optional[Predicate] = None) -> int:
    """ Compte les éléments (filtrés par *predicate*) en consommant le curseur.

        Le décompte ne peut être fait qu'une fois : le curseur est épuisé ensuite.
    """
    if predicate is None:
        return sum(1 for _ in cursor)

    return sum(1 for item in cursor if predicate(item))

def any_of(cursor: Iterable[T], predicate: Optional[Predicate] = None) -> bool:
    """ Vrai si au moins un élément vérifie le prédicat (ou si le curseur n'est pas vide). """
    if predicate is None:
        return _first(cursor) is not _ABSENT

    return any(predicate(item) for item in cursor)

def all_of(cursor: Iterable[T], predicate: Predicate) -> bool:
    """ Vrai si tous les éléments vérifient le prédicat (vrai pour un curseur vide). """
    return all(predicate(item) for item in cursor)
