"""League standings domain modules."""

from domain.common import Fixture, MatchOutcome, MatchResultBatch, OutcomeKind, make_batch

__all__ = ["Fixture", "MatchOutcome", "MatchResultBatch", "OutcomeKind", "make_batch"]
