"""
Library-wide options.

SAVED/OVERRIDE PATTERN:
- _saved_options: options every tree sees by default
- _override_options: ContextVar layered on top by options_context()

Saved options are seeded from the environment on first access, so a
deployment can flip id generation without code changes.
"""

import contextvars
import dataclasses
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

ENV_ID_FORCE_APPEND_INDEX = "FORMTREE_ID_FORCE_APPEND_INDEX"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class FormOptions:
    """Options consulted while building trees.

    Attributes:
        id_force_append_index: Append ``-0`` to the first generated id of a
            base, so ``foo`` becomes ``foo-0`` and later ``foo-1``.
        auto_id_base: Base id used for elements without a usable name.
    """
    id_force_append_index: bool = True
    auto_id_base: str = "qfauto"


_saved_options: Optional[FormOptions] = None
_override_options: contextvars.ContextVar = contextvars.ContextVar(
    "formtree_options", default=None
)


def _options_from_env() -> FormOptions:
    raw = os.environ.get(ENV_ID_FORCE_APPEND_INDEX)
    if raw is None:
        return FormOptions()
    force = raw.strip().lower() in _TRUE_VALUES
    logger.debug(f"{ENV_ID_FORCE_APPEND_INDEX}={raw!r} -> id_force_append_index={force}")
    return FormOptions(id_force_append_index=force)


def set_options(options: FormOptions) -> None:
    """Replace the saved options."""
    global _saved_options
    _saved_options = options


def get_saved_options() -> FormOptions:
    """Saved options, seeding them from the environment on first use."""
    global _saved_options
    if _saved_options is None:
        _saved_options = _options_from_env()
    return _saved_options


def get_options() -> FormOptions:
    """Effective options: the innermost options_context(), else saved."""
    override = _override_options.get()
    if override is not None:
        return override
    return get_saved_options()


def reset_options() -> None:
    """Drop saved options so the next access re-reads the environment."""
    global _saved_options
    _saved_options = None


@contextmanager
def options_context(**overrides):
    """
    Temporarily override options for the current context.

    Args:
        **overrides: FormOptions field values

    Usage:
        with options_context(id_force_append_index=False):
            form.add_text('foo')  # id 'foo', not 'foo-0'
    """
    merged = dataclasses.replace(get_options(), **overrides)
    token = _override_options.set(merged)
    try:
        yield merged
    finally:
        _override_options.reset(token)
