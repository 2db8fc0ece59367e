"""Career and team statistics built on ball-accurate overs."""

from .career import accumulate, combine, rebuild
from .classifier import Classification, InningsContribution, classify
from .team import TeamSummary, aggregate, fold, net_run_rate

__all__ = [
    "Classification",
    "InningsContribution",
    "TeamSummary",
    "accumulate",
    "aggregate",
    "classify",
    "combine",
    "fold",
    "net_run_rate",
    "rebuild",
]
