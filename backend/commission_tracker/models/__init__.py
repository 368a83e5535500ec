from commission_tracker.models.statement import Statement
from commission_tracker.models.carrier import Carrier, CarrierStatus
from commission_tracker.models.rep import Rep

__all__ = [
    "Statement",
    "Carrier",
    "CarrierStatus",
    "Rep",
]
