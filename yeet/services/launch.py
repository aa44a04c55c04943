"""
Launch Service - Turn desktop Exec strings into safe argument vectors.

Exec strings come from desktop files and user config, so they are treated
as untrusted. They are split with POSIX word rules (shlex) and never handed
to a shell: ";", "|", "&&" and backticks end up as literal argument text.

Field codes (%f, %u, %F, ...) are stripped since the launcher never
substitutes files or URLs. "%%" becomes a literal "%".

Terminal apps are wrapped as:
  <terminal program> <terminal args...> -e <app program> <app args...>
"""

import shlex
import subprocess
from enum import Enum

from loguru import logger

FIELD_CODES = frozenset("fFuUdDnNickvm")


class ParseFailure(Enum):
    """Why a launch command could not be built."""
    TOKENIZE_FAILED = "failed to parse desktop Exec"
    EMPTY_COMMAND = "desktop Exec is empty after cleaning"
    TERMINAL_TOKENIZE_FAILED = "failed to parse terminal command"
    EMPTY_TERMINAL_COMMAND = "terminal command is empty"


class LaunchCommandError(ValueError):
    """Raised when an Exec or terminal command can't be turned into argv."""

    def __init__(self, reason: ParseFailure, command: str):
        super().__init__(f"{reason.value}: {command!r}")
        self.reason = reason
        self.command = command


def clean_exec_arg(arg: str) -> str:
    """
    Strip desktop entry field codes from a single token.

    Single left-to-right scan, so "%%k" yields "%k" rather than being
    stripped a second time.

    Args:
        arg: One token produced by shell-word splitting

    Returns:
        The token with known field codes removed and "%%" collapsed
    """
    result = []
    chars = iter(arg)

    for c in chars:
        if c != "%":
            result.append(c)
            continue

        nxt = next(chars, None)
        if nxt is None:
            # Lone trailing '%' is dropped
            break
        if nxt == "%":
            result.append("%")
        elif nxt not in FIELD_CODES:
            result.append("%")
            result.append(nxt)

    return "".join(result)


def sanitize_exec(raw: str) -> tuple[str, list[str]]:
    """
    Split an Exec string into (program, args) without a shell.

    Args:
        raw: Exec value, e.g. "firefox --new-window %u"

    Returns:
        Tuple of (program, args)

    Raises:
        LaunchCommandError: TOKENIZE_FAILED on unbalanced quotes,
            EMPTY_COMMAND when nothing is left after cleaning
    """
    try:
        tokens = shlex.split(raw, comments=False, posix=True)
    except ValueError:
        raise LaunchCommandError(ParseFailure.TOKENIZE_FAILED, raw) from None

    cleaned = [c for c in (clean_exec_arg(t) for t in tokens) if c]
    if not cleaned:
        raise LaunchCommandError(ParseFailure.EMPTY_COMMAND, raw)

    return cleaned[0], cleaned[1:]


def build_invocation(app, terminal_command: str) -> tuple[str, list[str]]:
    """
    Build the final (program, args) for launching an application.

    Args:
        app: Application to launch
        terminal_command: Terminal emulator invocation, e.g. "kitty --single-instance"

    Returns:
        Tuple of (program, args). For terminal apps the program is the
        terminal and the app command follows "-e".

    Raises:
        LaunchCommandError: If the app Exec or the terminal command is unusable.
            Terminal problems carry the TERMINAL_* reasons.
    """
    program, args = sanitize_exec(app.exec)

    if not app.terminal:
        return program, args

    try:
        term_program, term_args = sanitize_exec(terminal_command)
    except LaunchCommandError as e:
        if e.reason is ParseFailure.TOKENIZE_FAILED:
            reason = ParseFailure.TERMINAL_TOKENIZE_FAILED
        else:
            reason = ParseFailure.EMPTY_TERMINAL_COMMAND
        raise LaunchCommandError(reason, terminal_command) from None

    return term_program, [*term_args, "-e", program, *args]


def launch_app(app, terminal_command: str) -> bool:
    """
    Spawn an application detached from the launcher's standard streams.

    Failures are logged and reported through the return value; nothing
    is retried.

    Returns:
        True if the process was spawned
    """
    try:
        program, args = build_invocation(app, terminal_command)
    except LaunchCommandError as e:
        logger.error(f"Failed to build launch command for {app.name}: {e}")
        return False

    try:
        subprocess.Popen(
            [program, *args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError:
        logger.exception(f"Failed to launch {app.name}")
        return False

    logger.debug(f"Launched {app.name}: {program} {args}")
    return True
