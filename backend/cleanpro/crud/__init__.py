from . import crud_rate
from . import crud_client
from . import crud_proposal
from . import crud_quote
