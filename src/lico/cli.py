from __future__ import annotations
import argparse
import logging
import pathlib
import sys
import yaml
from prettytable import PrettyTable

from lico import __version__
from lico import config as C, runner

__author__ = "G. PABOIS"
__copyright__ = "G. PABOIS"
__license__ = "MIT"

_logger = logging.getLogger(__name__)

def format_value(value: any, config: C.LicoConfig) -> str:
    """ Formate un résultat pour l'affichage """
    if value is None:
        return config.absent
    return repr(value)

def parse_value(raw: str) -> any:
    """ Interprète une valeur de la ligne de commande comme un scalaire YAML (12 -> int) """
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise runner.FixtureError(f"Valeur invalide: {raw!r} ({e})") from e

def print_cases(cases: list[runner.Case], config: C.LicoConfig):
    table = PrettyTable()
    table.align = config.table.align
    table.border = config.table.border
    table.field_names = ["cas", "opération", "séquence", "résultat"]

    for case in cases:
        result = runner.evaluate(case, config)
        table.add_row([
            case.name,
            case.op,
            case.seq or repr(case.values),
            format_value(result, config)
        ])

    print(table)

# --- COMMANDS HANDLERS ---
def eval_op(config: C.LicoConfig, args):
    """ Evalue une opération sur les valeurs passées en paramètre """
    case = runner.Case(
        name="cli",
        op=args.op,
        values=map(parse_value, args.values),
        default=parse_value(args.default) if args.default is not None else None,
        kind=args.kind,
        other=list(map(parse_value, args.other)) if args.other is not None else None
    )
    print(format_value(runner.evaluate(case, config), config))

def run_file(config: C.LicoConfig, args):
    _logger.info(f"Chargement des cas: {args.file}")
    cases = runner.load_cases(args.file)
    _logger.info(f"{len(cases)} cas à évaluer...")
    print_cases(cases, config)

def list_ops(config: C.LicoConfig, args):
    for name in runner.OPERATIONS:
        print(name)

_commands = {
    'eval': eval_op,
    'run': run_file,
    'ops': list_ops
}

# ---- CLI ----
# The functions defined in this section are wrappers around the main Python
# API allowing them to be called directly from the terminal as a CLI
# executable/script.
def parse_args(args):
    """Parse command line parameters

    Args:
      args (List[str]): command line parameters as list of strings
          (for example  ``["--help"]``).

    Returns:
      :obj:`argparse.Namespace`: command line parameters namespace
    """
    parser = argparse.ArgumentParser(description="CLI de démonstration des extensions LINQ sur les curseurs (lico)")
    parser.add_argument(
        "--version",
        action="version",
        version=f"lico {__version__}",
    )

    parser.add_argument("-c", "--config", dest="config", help="Fichier de configuration YAML, par défaut la valeur de la variable d'environnement LICO_CONFIG, ou lico.yml", type=pathlib.Path, metavar="CONFIG", default=None)
    subparsers = parser.add_subparsers(dest="cmd", help='la commande à exécuter', required=True)

    parser_eval = subparsers.add_parser('eval', help='Evalue une opération sur une séquence')
    parser_eval.add_argument(dest="op", help="Nom de l'opération (voir la commande ops)")
    parser_eval.add_argument(dest="values", nargs='*', help="Eléments de la séquence")
    parser_eval.add_argument('-d', '--default', dest="default", help="Valeur de repli des opérations *_or")
    parser_eval.add_argument('-k', '--kind', dest="kind", help="Type de la valeur par défaut des opérations *_or_default (int, str...)")
    parser_eval.add_argument('-o', '--other', dest="other", nargs='*', help="Seconde séquence (chain, intersect)")

    parser_run = subparsers.add_parser('run', help='Evalue les cas décrits dans un fichier YAML')
    parser_run.add_argument(dest="file", type=pathlib.Path, help="Chemin vers le fichier des cas")

    subparsers.add_parser('ops', help='Liste les opérations disponibles')

    parser.add_argument(
        "-v",
        "--verbose",
        dest="loglevel",
        help="affiche les messages d'information (INFO)",
        action="store_const",
        const=logging.INFO,
    )
    parser.add_argument(
        "-vv",
        "--very-verbose",
        dest="loglevel",
        help="affiche les messages de débogage (DEBUG)",
        action="store_const",
        const=logging.DEBUG,
    )
    return parser.parse_args(args)


def setup_logging(loglevel):
    """Setup basic logging

    Args:
      loglevel (int): minimum loglevel for emitting messages
    """
    logformat = "[%(asctime)s] %(levelname)s:%(name)s: %(message)s"
    logging.basicConfig(
        level=loglevel, stream=sys.stdout, format=logformat, datefmt="%Y-%m-%d %H:%M:%S"
    )

def main(args) -> int:
    """Wrapper allowing the commands to be called with string arguments in a CLI fashion

    Args:
      args (List[str]): command line parameters as list of strings
          (for example  ``["--verbose", "eval", "single", "12"]``).

    Returns:
      int: exit status, 1 if the command failed on invalid input
    """
    args = parse_args(args)
    setup_logging(args.loglevel)

    try:
        config = C.load_config(args.config)
        _commands[args.cmd](config, args)
    except ValueError as e:
        _logger.error(str(e))
        return 1

    return 0


def run():
    """Calls :func:`main` passing the CLI arguments extracted from :obj:`sys.argv`

    This function can be used as entry point to create console scripts with setuptools.
    """
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    # ^  This is a guard statement that will prevent the following code from
    #    being executed in the case someone imports this file instead of
    #    executing it as a script.
    #    https://docs.python.org/3/library/__main__.html

    # After installing your project with pip, users can also run your Python
    # modules as scripts via the ``-m`` flag, as defined in PEP 338::
    #
    #     python -m lico.cli run cas.yml
    #
    run()
