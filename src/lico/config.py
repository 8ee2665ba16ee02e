from __future__ import annotations
from typing import Callable, Optional
import copy
import logging
import os
import pathlib

logger = logging.getLogger(__name__)

DEFAULTS = {
    'table': {
        # Alignement des colonnes du tableau de résultats.
        'align': "l",
        'border': True
    },
    # Texte affiché pour un résultat absent.
    'absent': "N/D",
    # Type utilisé par les opérations *_or_default.
    'kind': "int"
}

KINDS: dict[str, Optional[Callable]] = {
    'int': int,
    'float': float,
    'str': str,
    'bool': bool,
    'list': list,
    'dict': dict,
    'none': None
}

class LicoConfig:
    def __init__(self, **values):
        self.values = values

    def __getitem__(self, key: str):
        value = self.values[key]

        if isinstance(value, dict):
            return LicoConfig(**value)

        return value

    def __getattr__(self, key: str) -> LicoConfig | any:
        try:
            return self[key]
        except KeyError:
            raise AttributeError(key) from None

def validate(values: dict) -> dict:
    """ Vérifie la structure de la configuration fusionnée. """
    if not isinstance(values.get('table'), dict):
        raise ValueError("'table' doit être un dictionnaire.")

    if not isinstance(values['table'].get('align'), str):
        raise ValueError("'table.align' doit être une chaîne (l, c ou r).")

    if not isinstance(values['table'].get('border'), bool):
        raise ValueError("'table.border' doit être un booléen.")

    for key in ('absent', 'kind'):
        if not isinstance(values.get(key), str):
            raise ValueError(f"'{key}' doit être une chaîne.")

    return values

def resolve_kind(name: Optional[str]) -> Optional[Callable]:
    """ Retourne le type associé au nom (int, str...), None pour « none ». """
    if name is None:
        return None

    key = str(name).lower()
    if key not in KINDS:
        raise ValueError(f"Type inconnu: {name} (attendu: {', '.join(KINDS)}).")

    return KINDS[key]

def load_config(path: Optional[str | pathlib.Path] = None) -> LicoConfig:
    """ Charge la configuration.

        Les valeurs par défaut sont fusionnées avec le fichier YAML *path*, ou à
        défaut celui désigné par LICO_CONFIG, ou à défaut lico.yml dans le
        répertoire courant s'il existe.
    """
    from yaml import safe_load, YAMLError
    from mergedeep import merge

    if path is None and 'LICO_CONFIG' in os.environ:
        path = os.environ['LICO_CONFIG']

    explicit = path is not None
    path = pathlib.Path(path) if explicit else pathlib.Path("lico.yml")

    values = copy.deepcopy(DEFAULTS)

    if not path.exists():
        if explicit:
            raise ValueError(f"Le fichier de configuration {path} n'existe pas.")
        return LicoConfig(**values)

    logger.debug(f"Chargement de la configuration: {path}")
    with path.open(mode="r", encoding="utf8") as file:
        try:
            conf = safe_load(file) or {}
        except YAMLError as e:
            raise ValueError(f"Configuration YAML invalide ({path}): {e}") from e

    if not isinstance(conf, dict):
        raise ValueError(f"La configuration {path} doit être un dictionnaire.")

    return LicoConfig(**validate(merge(values, conf)))
