# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Validation of commit messages against the configured conventional format.

The pipeline is linear: the first failing step decides the outcome and is
reported through the logger with a message specific to that step.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Final

from ..config.models import CommitMsgConfig, EffectiveConfig
from ..logging import HookLogger
from ..patterns import compile_pattern

COMMENT_PREFIX: Final[str] = "#"
FORMAT_HINT: Final[str] = "Format: <type>(<scope>): <description>"
_EMOJI_RE: Final[re.Pattern[str]] = re.compile("[\u2700-\u27bf]|[\U00010000-\U0010ffff]")
_SCOPE_PARENS_RE: Final[re.Pattern[str]] = re.compile(r"[()]")
_DESCRIPTION_GROUP: Final[int] = 3


class ErrorKind(StrEnum):
    """Reasons the commit message file could not be read."""

    NOT_FOUND = "not-found"
    PERMISSION_DENIED = "permission-denied"
    MISSING_ARGUMENT = "missing-argument"
    UNREADABLE = "unreadable"


class FailureKind(StrEnum):
    """Validation steps a commit message can fail."""

    EMPTY_MESSAGE = "empty-message"
    TOO_SHORT = "too-short"
    TOO_LONG = "too-long"
    MALFORMED_FORMAT = "malformed-format"
    DISALLOWED_TYPE = "disallowed-type"
    MISSING_SCOPE = "missing-scope"
    DISALLOWED_SCOPE = "disallowed-scope"
    EMOJI_NOT_ALLOWED = "emoji-not-allowed"


class MessageReadError(Exception):
    """Raised when the commit message file cannot be read."""

    def __init__(self, kind: ErrorKind, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.path = path


@dataclass(frozen=True, slots=True)
class ParsedCommitMessage:
    """Components extracted from a well-formed commit message."""

    type: str
    scope: str | None
    description: str
    raw: str


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Result of validating one commit message."""

    valid: bool
    failure: FailureKind | None = None
    parsed: ParsedCommitMessage | None = None
    special: bool = False
    skipped: bool = False


def read_commit_message(path: Path | str | None) -> str:
    """Return the raw contents of the commit message file at ``path``.

    Args:
        path: File git passes to the ``commit-msg`` hook.

    Returns:
        str: File contents decoded as UTF-8.

    Raises:
        MessageReadError: Raised when ``path`` is missing or unreadable; the
            ``kind`` attribute tells the cases apart.
    """

    if path is None or not str(path):
        raise MessageReadError(ErrorKind.MISSING_ARGUMENT, "No commit message file was passed to the hook")
    message_path = Path(path)
    try:
        return message_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise MessageReadError(
            ErrorKind.NOT_FOUND,
            f"Commit message file not found: {message_path}",
            message_path,
        ) from None
    except PermissionError:
        raise MessageReadError(
            ErrorKind.PERMISSION_DENIED,
            f"Permission denied reading {message_path}",
            message_path,
        ) from None
    except (OSError, UnicodeDecodeError) as exc:
        raise MessageReadError(
            ErrorKind.UNREADABLE,
            f"Unable to read {message_path}: {exc}",
            message_path,
        ) from exc


def strip_comments(text: str) -> str:
    """Drop comment lines (``#`` after optional indentation) and trim ``text``."""

    kept = [line for line in text.split("\n") if not line.strip().startswith(COMMENT_PREFIX)]
    return "\n".join(kept).strip()


def contains_emoji(text: str) -> bool:
    """Return whether ``text`` contains a dingbat or astral-plane code point."""

    return _EMOJI_RE.search(text) is not None


def parse_commit_message(message: str, pattern: re.Pattern[str]) -> ParsedCommitMessage | None:
    """Return the components of ``message`` or ``None`` when ``pattern`` does not match."""

    match = pattern.search(message)
    if match is None:
        return None
    groups = match.groups()
    commit_type = groups[0] if groups else match.group(0)
    scope_part = groups[1] if len(groups) > 1 else None
    scope = _SCOPE_PARENS_RE.sub("", scope_part) if scope_part else None
    if len(groups) >= _DESCRIPTION_GROUP and groups[_DESCRIPTION_GROUP - 1] is not None:
        description = groups[_DESCRIPTION_GROUP - 1].strip()
    else:
        description = message.replace(match.group(0), "", 1).strip()
    return ParsedCommitMessage(type=commit_type, scope=scope, description=description, raw=message)


class CommitMessageValidator:
    """Validate commit messages against the ``commit_msg`` configuration section.

    Args:
        config: Resolved configuration.
        logger: Destination for the per-failure explanations.
        is_ci: Whether the hook runs in CI; defaults to the resolved environment.
    """

    def __init__(self, config: EffectiveConfig, logger: HookLogger, is_ci: bool | None = None) -> None:
        self._config = config
        self._section: CommitMsgConfig = config.commit_msg
        self._logger = logger
        self._is_ci = config.advanced.env.is_ci if is_ci is None else is_ci

    def is_valid(self, text: str) -> bool:
        """Return whether ``text`` passes validation."""

        return self.validate(text).valid

    def validate(self, text: str) -> ValidationOutcome:
        """Validate the raw commit message ``text``.

        Args:
            text: Message as written by git, comment lines included.

        Returns:
            ValidationOutcome: Verdict with the failing step or parsed components.
        """

        section = self._section
        if not section.enabled:
            self._logger.info("Commit message validation is disabled")
            return ValidationOutcome(valid=True, skipped=True)
        if self._is_ci and self._config.general.skip_ci:
            self._logger.info("Commit message validation skipped in CI")
            return ValidationOutcome(valid=True, skipped=True)

        message = strip_comments(text)
        self._logger.debug(f'message="{message}"')
        if not message:
            self._logger.error("Commit message is empty")
            return ValidationOutcome(valid=False, failure=FailureKind.EMPTY_MESSAGE)

        if self._is_special(message):
            self._logger.info("Special commit (auto-skip, merge, revert or squash); skipping validation")
            return ValidationOutcome(valid=True, special=True)

        length_failure = self._check_length(message)
        if length_failure is not None:
            return ValidationOutcome(valid=False, failure=length_failure)

        parsed = parse_commit_message(message, compile_pattern(section.pattern))
        if parsed is None:
            self._report_malformed(message)
            return ValidationOutcome(valid=False, failure=FailureKind.MALFORMED_FORMAT)

        failure = self._check_components(parsed, message)
        if failure is not None:
            return ValidationOutcome(valid=False, failure=failure, parsed=parsed)

        scope = f"({parsed.scope})" if parsed.scope else ""
        self._logger.success(f"Commit message is valid: {parsed.type}{scope}: {parsed.description}")
        return ValidationOutcome(valid=True, parsed=parsed)

    def _is_special(self, message: str) -> bool:
        section = self._section
        if section.auto_skip_pattern is not None:
            if compile_pattern(section.auto_skip_pattern).search(message):
                return True
        if message.startswith("Merge ") and section.allow_merge:
            return True
        if message.startswith("Revert ") and section.allow_revert:
            return True
        return "squash" in message and section.allow_squash

    def _check_length(self, message: str) -> FailureKind | None:
        minimum = self._section.min_length or 0
        maximum = self._section.max_length or None
        length = len(message)
        if length < minimum:
            self._logger.error(f"Commit message is too short: {length} characters (minimum {minimum})")
            self._logger.error(f'Message: "{message}"')
            return FailureKind.TOO_SHORT
        if maximum is not None and length > maximum:
            self._logger.error(f"Commit message is too long: {length} characters (maximum {maximum})")
            self._logger.error(f'Message: "{message}"')
            return FailureKind.TOO_LONG
        return None

    def _report_malformed(self, message: str) -> None:
        section = self._section
        self._logger.error("Commit message does not match the required format")
        if section.examples:
            self._logger.info("Examples of valid commit messages:")
            for example in section.examples:
                self._logger.info(f"  {example}")
        self._logger.info(FORMAT_HINT)
        if section.types:
            self._logger.info(f"Allowed types: {', '.join(section.types)}")
        if section.scopes:
            self._logger.info(f"Allowed scopes: {', '.join(section.scopes)}")
        self._logger.info(f'Your message: "{message}"')

    def _check_components(self, parsed: ParsedCommitMessage, message: str) -> FailureKind | None:
        section = self._section
        if section.types and parsed.type not in section.types:
            self._logger.error(f'Commit type "{parsed.type}" is not allowed')
            self._logger.error(f"Allowed types: {', '.join(section.types)}")
            return FailureKind.DISALLOWED_TYPE
        if section.require_scope and not parsed.scope:
            self._logger.error("A scope is required, e.g. feat(auth): add login")
            return FailureKind.MISSING_SCOPE
        if section.scopes and parsed.scope not in section.scopes:
            self._logger.error(f'Scope "{parsed.scope or ""}" is not in the allowed list')
            self._logger.error(f"Allowed scopes: {', '.join(section.scopes)}")
            return FailureKind.DISALLOWED_SCOPE
        if not section.allow_emoji and contains_emoji(message):
            self._logger.error("Emoji are not allowed in commit messages")
            return FailureKind.EMOJI_NOT_ALLOWED
        return None


__all__ = [
    "CommitMessageValidator",
    "ErrorKind",
    "FailureKind",
    "MessageReadError",
    "ParsedCommitMessage",
    "ValidationOutcome",
    "contains_emoji",
    "parse_commit_message",
    "read_commit_message",
]
