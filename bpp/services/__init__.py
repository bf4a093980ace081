"""Publishing services: dispatch planning and concurrent submission.

Services sit between the CLI and the store submitters; they decide what is
submitted where and turn individual store results into one report.
"""

from bpp.services.aggregate import OutcomeStatus, PublishReport, StoreOutcome, run_submissions
from bpp.services.dispatch import DispatchPlan, GlobalInputs, parse_keys, plan_dispatch
from bpp.services.errors import PublishError

__all__ = [
    "DispatchPlan",
    "GlobalInputs",
    "OutcomeStatus",
    "PublishError",
    "PublishReport",
    "StoreOutcome",
    "parse_keys",
    "plan_dispatch",
    "run_submissions",
]
