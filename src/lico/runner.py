""" Rejoue des opérations sur des séquences littérales, décrites en YAML

Exemple de document :

    sequences:
      vide: []
      paire: [0, 1]
    cases:
      - name: single_or sur une paire
        op: single_or
        seq: paire
        default: 42
"""
from __future__ import annotations
from typing import Any, Callable, Optional
from collections.abc import Iterator
import logging
import pathlib

from . import extensions as X
from .config import LicoConfig, resolve_kind
from .cursor import Cursor, open_cursor

logger = logging.getLogger(__name__)

class FixtureError(ValueError):
    pass

class Case:
    """ Un cas à évaluer : une opération appliquée à une séquence. """
    def __init__(
        self,
        name: str,
        op: str,
        values: list,
        default: any = None,
        kind: Optional[str] = None,
        other: Optional[list] = None,
        seq: Optional[str] = None
    ):
        self.name = name
        self.op = op
        self.values = list(values)
        self.default = default
        self.kind = kind
        self.other = list(other) if other is not None else None
        # Nom de la séquence dans le document, pour l'affichage.
        self.seq = seq

    def __repr__(self):
        return f"Case(name={self.name}, op={self.op}, values={self.values})"

def _kind(case: Case, config: LicoConfig):
    return resolve_kind(case.kind if case.kind is not None else config.kind)

def _other(case: Case) -> list:
    if case.other is None:
        raise FixtureError(f"L'opération {case.op} requiert une séquence 'other' ({case.name}).")
    return case.other

Operation = Callable[[Cursor, Case, LicoConfig], Any]

OPERATIONS: dict[str, Operation] = {
    'single': lambda cursor, case, config: X.single(cursor),
    'single_or': lambda cursor, case, config: X.single_or(cursor, case.default),
    'single_or_default': lambda cursor, case, config: X.single_or_default(cursor, _kind(case, config)),
    'first': lambda cursor, case, config: X.first(cursor),
    'first_or': lambda cursor, case, config: X.first_or(cursor, case.default),
    'first_or_default': lambda cursor, case, config: X.first_or_default(cursor, _kind(case, config)),
    'last': lambda cursor, case, config: X.last(cursor),
    'last_or': lambda cursor, case, config: X.last_or(cursor, case.default),
    'last_or_default': lambda cursor, case, config: X.last_or_default(cursor, _kind(case, config)),
    'count': lambda cursor, case, config: X.count(cursor),
    'any': lambda cursor, case, config: X.any_of(cursor),
    'chain': lambda cursor, case, config: cursor.chain(_other(case)).to_list(),
    'intersect': lambda cursor, case, config: cursor.intersect(_other(case)).to_list(),
}

def evaluate(case: Case, config: LicoConfig) -> any:
    """ Evalue le cas sur un curseur neuf ouvert sur ses valeurs. """
    if not isinstance(case.op, str) or case.op not in OPERATIONS:
        raise FixtureError(f"Opération inconnue: {case.op!r} ({case.name}).")

    logger.debug(f"Evaluation: {repr(case)}")
    try:
        return OPERATIONS[case.op](open_cursor(case.values), case, config)
    except TypeError as e:
        # Eléments non hachables (intersect), par exemple des listes.
        raise FixtureError(f"Valeurs incompatibles avec {case.op} ({case.name}): {e}") from e

def _sequence(sequences: dict, ref: any, name: str) -> tuple[Optional[str], list]:
    """ Résout une séquence, référencée par son nom ou donnée en ligne. """
    if isinstance(ref, str):
        if ref not in sequences:
            raise FixtureError(f"Séquence inconnue: {ref} ({name}).")
        return ref, sequences[ref]

    if isinstance(ref, list):
        return None, ref

    raise FixtureError(f"Séquence invalide pour {name}: {ref!r}.")

def parse_cases(document: dict) -> Iterator[Case]:
    """ Génère les cas décrits par le document. """
    if not isinstance(document, dict):
        raise FixtureError("Le document doit être un dictionnaire.")

    sequences = document.get('sequences') or {}
    if not isinstance(sequences, dict):
        raise FixtureError("'sequences' doit être un dictionnaire.")

    for name, values in sequences.items():
        if not isinstance(values, list):
            raise FixtureError(f"La séquence {name} doit être une liste.")

    cases = document.get('cases') or []
    if not isinstance(cases, list):
        raise FixtureError("'cases' doit être une liste.")

    for i, entry in enumerate(cases, start=1):
        if not isinstance(entry, dict) or 'op' not in entry or 'seq' not in entry:
            raise FixtureError(f"Le cas #{i} doit définir 'op' et 'seq'.")

        if not isinstance(entry['op'], str):
            raise FixtureError(f"L'opération du cas #{i} doit être un nom: {entry['op']!r}.")

        name = str(entry.get('name', f"#{i}"))
        seq, values = _sequence(sequences, entry['seq'], name)
        other = entry.get('other')
        if other is not None:
            _, other = _sequence(sequences, other, name)

        yield Case(
            name=name,
            op=entry['op'],
            values=values,
            default=entry.get('default'),
            kind=entry.get('kind'),
            other=other,
            seq=seq
        )

def load_cases(path: str | pathlib.Path) -> list[Case]:
    """ Charge les cas depuis un fichier YAML """
    from yaml import safe_load, YAMLError

    path = pathlib.Path(path)
    if not path.is_file():
        raise FixtureError(f"Le fichier {path} n'existe pas.")

    with path.open(mode="r", encoding="utf8") as file:
        try:
            document = safe_load(file)
        except YAMLError as e:
            raise FixtureError(f"Document YAML invalide ({path}): {e}") from e

    return list(parse_cases(document))
