"""librarian - locate librarian files and print the variables they declare

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from cli_config import build_settings
from common.errors import LibrarianIOError, LibraryNotFoundError, RequirementSyntaxError
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from resolution.engine import resolve_closure
from resolution.variables import get_variables
from versioning.parser import classify_tokens

logger = logging.getLogger(Constants.PROG)


def run(args, environ=None, fs=None, out=None):
    """Resolve the requested libraries and write the result.

    Args:
        args: Parsed command-line arguments.
        environ: Environment mapping, ``os.environ`` by default.
        fs: I/O primitives, the local file system by default.
        out: Stream receiving the results, stdout by default.

    Returns:
        int: Exit code
    """
    out = out or sys.stdout
    settings = build_settings(args, environ)
    if settings.log_level and not getattr(args, "LOG_LEVEL", None):
        level = str(settings.log_level).upper()
        if level in Constants.LOG_LEVELS:
            logging.getLogger().setLevel(level)
        else:
            logger.warning("Ignoring unknown log level: %s", settings.log_level)

    try:
        variables, requirements = classify_tokens(args.TOKENS)
    except RequirementSyntaxError as e:
        logger.error("%s", e)
        return ExitCodes.USAGE_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "Starting resolution",
            extra=extra_context(
                event="function_entry",
                component="cli",
                action="run",
                target=Constants.PATH_SEPARATOR.join(settings.search_path),
                libraries=len(requirements),
                variables=len(variables),
                deps=settings.deps,
                oldest=settings.oldest,
            ),
        )

    try:
        registry = resolve_closure(
            requirements,
            settings.search_path,
            oldest=settings.oldest,
            expand_deps=settings.deps,
            fs=fs,
        )
        if args.LOCATE:
            for path in registry.paths():
                out.write(path + "\n")
        else:
            out.write(get_variables(variables, registry.files(), fs) + "\n")
        out.flush()
    except LibraryNotFoundError as e:
        logger.error("%s", e)
        return ExitCodes.NOT_FOUND.value
    except LibrarianIOError as e:
        logger.error("%s", e)
        return ExitCodes.FILE_ERROR.value
    except OSError as e:
        logger.error("Failed to write output: %s", e)
        return ExitCodes.FILE_ERROR.value

    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
