"""Command line entry point."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .args import parse_args
from .config import ConfigError, identifier_options_from_config, load_config
from .constants import ExitCodes
from .errors import PinrefError
from .identifier import Identifier, IdentifierOptions, new_identifier_options
from .identifier_parser import parse_identifier
from .logging_utils import configure_logging, is_debug_enabled
from .reference import Reference
from .reference_parser import parse
from .resolve import select_version
from .version import parse_version
from .version_constraint import parse_version_constraint

logger = logging.getLogger(__name__)


def identifier_to_dict(identifier: Identifier) -> Dict[str, Any]:
    """Serialize an identifier (or reference) for JSON output."""
    data: Dict[str, Any] = {
        "type": identifier.type,
        "registry": identifier.registry,
        "namespace": identifier.namespace or None,
        "name": identifier.name or None,
        "path": identifier.path,
        "uri": identifier.uri,
        "canonical": str(identifier),
    }
    if isinstance(identifier, Reference):
        data["version"] = str(identifier.version) if identifier.version is not None else None
        data["channel"] = identifier.channel
        data["digest"] = str(identifier.digest) if identifier.digest is not None else None
        data["frozen"] = identifier.is_frozen()
    return data


def _resolve_options(args) -> IdentifierOptions:
    options = identifier_options_from_config(load_config(getattr(args, "CONFIG", None)))
    registry = getattr(args, "DEFAULT_REGISTRY", None) or options.default_registry
    namespace = getattr(args, "DEFAULT_NAMESPACE", None) or options.default_namespace
    return new_identifier_options(registry, namespace)


def _emit(args, text: str, payload: Any) -> None:
    if args.JSON:
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        print(text)


def _cmd_reference(args) -> int:
    ref = parse(args.REFERENCE, args.TYPE, _resolve_options(args))
    _emit(args, str(ref), identifier_to_dict(ref))
    return ExitCodes.SUCCESS.value


def _cmd_identifier(args) -> int:
    identifier = parse_identifier(args.IDENTIFIER, args.TYPE, _resolve_options(args))
    _emit(args, str(identifier), identifier_to_dict(identifier))
    return ExitCodes.SUCCESS.value


def _cmd_version(args) -> int:
    version = parse_version(args.VERSION)
    _emit(args, str(version), {
        "major": version.major,
        "minor": version.minor,
        "patch": version.patch,
        "prerelease": version.prerelease,
        "build": version.build,
    })
    return ExitCodes.SUCCESS.value


def _cmd_compare(args) -> int:
    left, right = parse_version(args.LEFT), parse_version(args.RIGHT)
    ordering, valid = left.compare(right)
    if not valid:
        sys.stderr.write(f"ERROR: {left} and {right} are not comparable\n")
        return ExitCodes.PARSE_ERROR.value
    _emit(args, str(ordering), {"left": str(left), "right": str(right), "ordering": ordering})
    return ExitCodes.SUCCESS.value


def _cmd_match(args) -> int:
    constraint = parse_version_constraint(args.CONSTRAINT)
    results = {v: constraint.matches(v) for v in args.VERSIONS}
    lines: List[str] = [f"{v}: {'match' if ok else 'no match'}" for v, ok in results.items()]
    _emit(args, "\n".join(lines), {"constraint": str(constraint), "results": results})
    if all(results.values()):
        return ExitCodes.SUCCESS.value
    return ExitCodes.NO_MATCH.value


def _cmd_intersect(args) -> int:
    combined = parse_version_constraint(args.LEFT).intersect(parse_version_constraint(args.RIGHT))
    _emit(args, str(combined), {"constraint": str(combined)})
    return ExitCodes.SUCCESS.value


def _cmd_select(args) -> int:
    constraint = parse_version_constraint(args.CONSTRAINT)
    chosen = select_version(constraint, args.CANDIDATES, coerce=args.COERCE)
    if chosen is None:
        sys.stderr.write(f"No candidate satisfies '{constraint}'\n")
        return ExitCodes.NO_MATCH.value
    _emit(args, str(chosen), {"constraint": str(constraint), "selected": str(chosen)})
    return ExitCodes.SUCCESS.value


COMMANDS = {
    "reference": _cmd_reference,
    "identifier": _cmd_identifier,
    "version": _cmd_version,
    "compare": _cmd_compare,
    "match": _cmd_match,
    "intersect": _cmd_intersect,
    "select": _cmd_select,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug("Running command %s", args.COMMAND)

    try:
        return COMMANDS[args.COMMAND](args)
    except ConfigError as exc:
        logger.error("%s", exc)
        sys.stderr.write(f"ERROR: {exc}\n")
        return ExitCodes.FILE_ERROR.value
    except PinrefError as exc:
        sys.stderr.write(f"ERROR: {exc}\n")
        return ExitCodes.PARSE_ERROR.value


if __name__ == "__main__":
    sys.exit(main())
