"""Shell completion functions for the jump CLI."""

from click.shell_completion import CompletionItem

from .config import BOOLEAN_KEYS, load_options
from .errors import JumpError
from .search import FIND_ALL, resolve
from .store import load_store


def complete_fragments(ctx, param, incomplete: str) -> list:
    """Shell completion for search fragments: every directory they resolve to.

    The fragments already on the command line plus the word being completed
    are resolved in find-all mode, honouring any matching flags given.
    """
    fragments = list(ctx.params.get("fragments") or ())
    if incomplete:
        fragments.append(incomplete)
    if not fragments:
        return []

    switches = {key: ctx.params.get(key) or None for key in BOOLEAN_KEYS}
    try:
        matches = resolve(
            fragments,
            FIND_ALL,
            load_options(**switches),
            file_pattern=ctx.params.get("file_pattern"),
        )
    except JumpError:
        return []

    # Already right on the command line
    if len(matches) == 1 and matches[0].path == incomplete:
        return []

    return [CompletionItem(m.path, help=m.tier.description) for m in matches]


def complete_database_entry(ctx, param, incomplete: str) -> list:
    """Shell completion for paths stored in the database."""
    try:
        db = load_store()
    except JumpError:
        return []

    return [
        CompletionItem(path, help=f"weight {weight}")
        for path, weight in sorted(db.items())
        if not incomplete or path.startswith(incomplete)
    ]
