from .rate import Rate, RateCategory, AdjustmentType, ServiceFrequency, FREQUENCY_LABELS
from .client import Client, ClientStatus
from .proposal import Proposal, ProposalStatus
from .quote import Quote, QuoteStatus
from .outbox_event import OutboxEvent, OutboxStatus

__all__ = [
    "Rate",
    "RateCategory",
    "AdjustmentType",
    "ServiceFrequency",
    "FREQUENCY_LABELS",
    "Client",
    "ClientStatus",
    "Proposal",
    "ProposalStatus",
    "Quote",
    "QuoteStatus",
    "OutboxEvent",
    "OutboxStatus",
]
