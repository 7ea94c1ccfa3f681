from .rate import RateCreate, RateUpdate, RateRead, BasePriceOut
from .quote import QuoteRequest, PricedQuote, QuoteCreate, QuoteUpdate, QuoteRead
from .client import ClientCreate, ClientRead
from .proposal import LineItem, ProposalCreate, ProposalRead
from .outbox import OutboxEventRead
