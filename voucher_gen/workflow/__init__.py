"""Recharge card print workflow."""

from voucher_gen.workflow.commit import PrintCommitter
from voucher_gen.workflow.review import ReviewDecision, ReviewStage
from voucher_gen.workflow.selection import DenominationSelection
from voucher_gen.workflow.session import PrintSession, Stage

__all__ = [
    "DenominationSelection",
    "PrintCommitter",
    "PrintSession",
    "ReviewDecision",
    "ReviewStage",
    "Stage",
]
