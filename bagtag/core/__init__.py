"""
Bagtag Core

Modules:
- models: Player, Participant and Round value types
- validation: Round input checks
- redistribution: Bagtag reassignment from scores
- changes: Bagtag delta summaries
- rounds: Round processing and roster updates
- players: Player creation and selection helpers
"""


def __getattr__(name):
    """Resolve the main core functions on first access instead of importing every module up front."""
    if name == "validate_round":
        from bagtag.core.validation import validate_round
        return validate_round
    if name == "redistribute_bagtags":
        from bagtag.core.redistribution import redistribute_bagtags
        return redistribute_bagtags
    if name == "get_bagtag_changes":
        from bagtag.core.changes import get_bagtag_changes
        return get_bagtag_changes
    if name == "process_round":
        from bagtag.core.rounds import process_round
        return process_round
    if name == "create_player":
        from bagtag.core.players import create_player
        return create_player
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
